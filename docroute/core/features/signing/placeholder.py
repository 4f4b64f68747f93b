# (c) Copyright Datacraft, 2026
"""Placeholder PDF sent for signing when a document has no stored file."""
import io
from datetime import datetime
from textwrap import wrap

from reportlab.lib.pagesizes import LETTER
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas

from docroute.core.features.documents.db.orm import Document
from docroute.core.utils.tz import utc_now

FOOTER = (
	"This placeholder was generated because no file was attached to the "
	"document at the time it was submitted for signing."
)


def placeholder_file_name(document: Document, now: datetime | None = None) -> str:
	now = now or utc_now()
	return f"{document.id}-placeholder-{int(now.timestamp() * 1000)}.pdf"


def generate_placeholder_pdf(
	document: Document,
	generated_for: str | None = None,
	now: datetime | None = None,
) -> bytes:
	"""Render a one page summary of the document metadata."""
	now = now or utc_now()
	buffer = io.BytesIO()
	c = canvas.Canvas(buffer, pagesize=LETTER)
	width, height = LETTER

	c.setTitle(document.title)
	c.setFont("Helvetica-Bold", 20)
	c.drawCentredString(width / 2, height - 1 * inch, document.title[:80])

	rows = [
		("Document Code", document.code or "-"),
		("Classification", document.classification or "-"),
		("Status", document.status),
		("Origin", str(document.origin)),
		("Generated For", generated_for or "-"),
		("Generated At", now.strftime("%Y-%m-%d %H:%M:%S UTC")),
	]
	y_pos = height - 1.8 * inch
	for label, value in rows:
		c.setFont("Helvetica-Bold", 12)
		c.drawString(1 * inch, y_pos, f"{label}:")
		c.setFont("Helvetica", 12)
		c.drawString(2.6 * inch, y_pos, str(value)[:70])
		y_pos -= 0.3 * inch

	summary = document.description or document.remarks
	if summary:
		y_pos -= 0.2 * inch
		c.setFont("Helvetica-Bold", 12)
		c.drawString(1 * inch, y_pos, "Summary:")
		c.setFont("Helvetica", 11)
		for line in wrap(summary, 90)[:25]:
			y_pos -= 0.25 * inch
			c.drawString(1 * inch, y_pos, line)

	c.setFont("Helvetica-Oblique", 9)
	for i, line in enumerate(wrap(FOOTER, 100)):
		c.drawCentredString(width / 2, 1 * inch - i * 0.18 * inch, line)

	c.showPage()
	c.save()
	return buffer.getvalue()
