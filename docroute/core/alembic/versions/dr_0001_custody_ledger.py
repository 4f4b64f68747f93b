# (c) Copyright Datacraft, 2026
"""Create departments, documents, workflow ledgers and audit trail.

Revision ID: dr_0001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = 'dr_0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
	op.create_table(
		'departments',
		sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
		sa.Column('name', sa.String(255), nullable=False),
		sa.Column('code', sa.String(50), nullable=True, unique=True),
		sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
		sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
	)

	op.create_table(
		'department_members',
		sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
		sa.Column(
			'department_id',
			postgresql.UUID(as_uuid=True),
			sa.ForeignKey('departments.id', ondelete='CASCADE'),
			nullable=False,
		),
		sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
		sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
		sa.UniqueConstraint('department_id', 'user_id', name='uq_department_member'),
	)
	op.create_index('ix_department_members_department_id', 'department_members', ['department_id'])
	op.create_index('ix_department_members_user_id', 'department_members', ['user_id'])

	op.create_table(
		'documents',
		sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
		sa.Column('title', sa.String(512), nullable=False),
		sa.Column('code', sa.String(100), nullable=True),
		sa.Column('classification', sa.String(100), nullable=True),
		sa.Column('document_type', sa.String(100), nullable=True),
		sa.Column(
			'origin',
			postgresql.UUID(as_uuid=True),
			sa.ForeignKey('departments.id'),
			nullable=False,
		),
		sa.Column('description', sa.Text, nullable=True),
		sa.Column('remarks', sa.Text, nullable=True),
		sa.Column('status', sa.String(20), nullable=False, server_default='dispatch'),
		sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=True),
		sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
		sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
		sa.CheckConstraint(
			"status IN ('dispatch', 'intransit', 'received', 'completed', 'canceled', 'deleted')",
			name='ck_documents_status',
		),
	)
	op.create_index('ix_documents_code', 'documents', ['code'])
	op.create_index('ix_documents_origin', 'documents', ['origin'])
	op.create_index('ix_documents_status', 'documents', ['status'])

	op.create_table(
		'workflow_ledgers',
		sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
		sa.Column(
			'document_id',
			postgresql.UUID(as_uuid=True),
			sa.ForeignKey('documents.id', ondelete='CASCADE'),
			nullable=False,
			unique=True,
		),
		sa.Column('chain', postgresql.JSONB, nullable=False, server_default='[]'),
		sa.Column('acknowledged', postgresql.JSONB, nullable=False, server_default='[]'),
		sa.Column('shared_with', postgresql.JSONB, nullable=False, server_default='[]'),
		sa.Column('signing_status', sa.String(20), nullable=False, server_default='unsubmitted'),
		sa.Column('project_id', sa.String(255), nullable=True),
		sa.Column('tx_hash', sa.String(255), nullable=True),
		sa.Column('redirect_url', sa.Text, nullable=True),
		sa.Column('signed_at', sa.DateTime(timezone=True), nullable=True),
		sa.Column('signed_by', sa.String(255), nullable=True),
		sa.Column('submitted_by', postgresql.UUID(as_uuid=True), nullable=True),
		sa.Column('last_error', sa.Text, nullable=True),
		sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
		sa.Column('deleted_by', postgresql.UUID(as_uuid=True), nullable=True),
		sa.Column('restored_at', sa.DateTime(timezone=True), nullable=True),
		sa.Column('restored_by', postgresql.UUID(as_uuid=True), nullable=True),
		sa.Column(
			'version',
			sa.Integer,
			nullable=False,
			comment='Optimistic concurrency stamp',
		),
		sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
	)

	op.create_table(
		'document_files',
		sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
		sa.Column(
			'document_id',
			postgresql.UUID(as_uuid=True),
			sa.ForeignKey('documents.id', ondelete='CASCADE'),
			nullable=False,
		),
		sa.Column('name', sa.String(512), nullable=False),
		sa.Column('storage_path', sa.String(1024), nullable=False),
		sa.Column('size', sa.BigInteger, nullable=False, server_default='0'),
		sa.Column('checksum', sa.String(128), nullable=True),
		sa.Column('mime_type', sa.String(100), nullable=False, server_default='application/pdf'),
		sa.Column('is_primary', sa.Boolean, nullable=False, server_default=sa.false()),
		sa.Column('is_placeholder', sa.Boolean, nullable=False, server_default=sa.false()),
		sa.Column('version_tag', sa.String(50), nullable=True),
		sa.Column('uploaded_by', postgresql.UUID(as_uuid=True), nullable=True),
		sa.Column('uploaded_at', sa.DateTime(timezone=True), nullable=False),
	)
	op.create_index('ix_document_files_document_id', 'document_files', ['document_id'])

	op.create_table(
		'audit_trail_entries',
		sa.Column('id', sa.String(36), primary_key=True),
		sa.Column('document_id', postgresql.UUID(as_uuid=True), nullable=False),
		sa.Column('from_department', postgresql.UUID(as_uuid=True), nullable=True),
		sa.Column('to_department', postgresql.UUID(as_uuid=True), nullable=True),
		sa.Column('actor_user_id', postgresql.UUID(as_uuid=True), nullable=True),
		sa.Column('status', sa.String(20), nullable=False),
		sa.Column('action', sa.String(512), nullable=True),
		sa.Column('remarks', sa.Text, nullable=True),
		sa.Column(
			'pairs_with',
			sa.String(36),
			nullable=True,
			comment='Release entry acknowledged by this receive entry',
		),
		sa.Column('occurred_at', sa.DateTime(timezone=True), nullable=False),
	)
	op.create_index(
		'idx_audit_trail_document',
		'audit_trail_entries',
		['document_id', 'occurred_at'],
	)
	op.create_index(
		'idx_audit_trail_to_department',
		'audit_trail_entries',
		['to_department'],
	)


def downgrade() -> None:
	op.drop_index('idx_audit_trail_to_department', 'audit_trail_entries')
	op.drop_index('idx_audit_trail_document', 'audit_trail_entries')
	op.drop_table('audit_trail_entries')

	op.drop_index('ix_document_files_document_id', 'document_files')
	op.drop_table('document_files')

	op.drop_table('workflow_ledgers')

	op.drop_index('ix_documents_status', 'documents')
	op.drop_index('ix_documents_origin', 'documents')
	op.drop_index('ix_documents_code', 'documents')
	op.drop_table('documents')

	op.drop_index('ix_department_members_user_id', 'department_members')
	op.drop_index('ix_department_members_department_id', 'department_members')
	op.drop_table('department_members')
	op.drop_table('departments')
