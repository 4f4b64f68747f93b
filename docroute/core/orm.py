# (c) Copyright Datacraft, 2026
"""Central ORM model exports."""
from .features.departments.db.orm import Department, DepartmentMember
from .features.documents.db.orm import Document, DocumentFile, WorkflowLedger
from .features.audit.db.orm import AuditTrailEntry

__all__ = [
	'Department',
	'DepartmentMember',
	'Document',
	'DocumentFile',
	'WorkflowLedger',
	'AuditTrailEntry',
]
