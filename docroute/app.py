import logging
import os
from contextlib import asynccontextmanager
from logging.config import dictConfig
from pathlib import Path

import yaml
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docroute.core import handlers
from docroute.core.config import get_settings
from docroute.core.db.engine import dispose_engine
from docroute.core.features.audit.router import router as audit_router
from docroute.core.features.documents.router import router as documents_router
from docroute.core.features.events.router import router as events_router
from docroute.core.features.recycle_bin.router import router as recycle_bin_router
from docroute.core.features.routing.router import router as routing_router
from docroute.core.features.signing.router import router as signing_router
from docroute.core.routers.version import router as version_router
from docroute.core.version import __version__

logger = logging.getLogger(__name__)
config = get_settings()
prefix = config.api_prefix


@asynccontextmanager
async def lifespan(app: FastAPI):
	logger.info("Starting docroute API server...")
	yield
	logger.info("Shutting down docroute API server...")
	await dispose_engine()


app = FastAPI(
	title="docroute REST API",
	version=__version__,
	lifespan=lifespan,
)

app.add_middleware(
	CORSMiddleware,
	allow_origins=["*"],
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)

handlers.install(app)

# Routing views must be registered before the generic document routes
app.include_router(routing_router, prefix=prefix)
app.include_router(documents_router, prefix=prefix)
app.include_router(recycle_bin_router, prefix=prefix)
app.include_router(audit_router, prefix=prefix)
app.include_router(signing_router, prefix=prefix)
app.include_router(events_router, prefix=prefix)
app.include_router(version_router, prefix=prefix)


logging_config_path = Path(
	os.environ.get("DOCROUTE__MAIN__LOGGING_CFG", str(config.log_config or ""))
)

if logging_config_path.exists() and logging_config_path.is_file():
	with open(logging_config_path, "r") as stream:
		logging_config = yaml.load(stream, Loader=yaml.FullLoader)

	dictConfig(logging_config)
