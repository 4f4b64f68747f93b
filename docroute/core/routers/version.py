# (c) Copyright Datacraft, 2026
from fastapi import APIRouter

from docroute.core.version import __version__

router = APIRouter(prefix="/version", tags=["version"])


@router.get("")
async def get_version() -> dict[str, str]:
	return {"version": __version__}
