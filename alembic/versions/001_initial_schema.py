"""Create principals, hiring_requests, submissions and notifications

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create the casting marketplace tables."""
    op.create_table(
        'principals',
        sa.Column('id', sa.BigInteger(), nullable=False, autoincrement=True),
        sa.Column('kind', sa.String(length=20), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=False),
        sa.Column('gender', sa.String(length=10), nullable=False),
        sa.Column('role', sa.String(length=50), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('otp', sa.String(length=12), nullable=True),
        sa.Column('otp_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reset_token_hash', sa.String(length=64), nullable=True),
        sa.Column('reset_token_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('device_token', sa.String(length=512), nullable=True),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('profile_pic_url', sa.String(length=1024), nullable=True),
        sa.Column('profile_pic_key', sa.String(length=512), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        # Hirer
        sa.Column('country', sa.String(length=100), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        # Talent
        sa.Column('height', sa.String(length=20), nullable=True),
        sa.Column('weight', sa.String(length=20), nullable=True),
        sa.Column('body_type', sa.String(length=20), nullable=True),
        sa.Column('skin_tone', sa.String(length=20), nullable=True),
        sa.Column('language', sa.String(length=255), nullable=True),
        sa.Column('skills', sa.JSON(), nullable=True),
        sa.Column('front_image_url', sa.String(length=1024), nullable=True),
        sa.Column('front_image_key', sa.String(length=512), nullable=True),
        sa.Column('left_image_url', sa.String(length=1024), nullable=True),
        sa.Column('left_image_key', sa.String(length=512), nullable=True),
        sa.Column('right_image_url', sa.String(length=1024), nullable=True),
        sa.Column('right_image_key', sa.String(length=512), nullable=True),
        sa.Column('video_url', sa.String(length=1024), nullable=True),
        sa.Column('video_key', sa.String(length=512), nullable=True),
        sa.Column('about_yourself', sa.Text(), nullable=True),
        sa.Column('makeover_needed', sa.Boolean(), nullable=True),
        sa.Column('willing_to_work_as_extra', sa.Boolean(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('kind', 'email', name='uq_principals_kind_email'),
    )
    op.create_index('ix_principals_kind', 'principals', ['kind'])
    op.create_index('ix_principals_email', 'principals', ['email'])
    op.create_index('ix_principals_reset_token_hash', 'principals', ['reset_token_hash'])

    op.create_table(
        'hiring_requests',
        sa.Column('id', sa.BigInteger(), nullable=False, autoincrement=True),
        sa.Column('hirer_id', sa.BigInteger(), nullable=False),
        sa.Column('talent_id', sa.BigInteger(), nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['hirer_id'], ['principals.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['talent_id'], ['principals.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('hirer_id', 'talent_id', name='uq_hiring_requests_pair'),
        sa.CheckConstraint("status IN ('Pending', 'Accepted')", name='ck_hiring_requests_status'),
    )
    op.create_index('ix_hiring_requests_hirer_id', 'hiring_requests', ['hirer_id'])
    op.create_index('ix_hiring_requests_talent_id', 'hiring_requests', ['talent_id'])
    op.create_index('idx_hiring_requests_hirer_status', 'hiring_requests', ['hirer_id', 'status'])

    op.create_table(
        'submissions',
        sa.Column('id', sa.BigInteger(), nullable=False, autoincrement=True),
        sa.Column('owner_id', sa.BigInteger(), nullable=False),
        sa.Column('subject', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['owner_id'], ['principals.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_submissions_owner_id', 'submissions', ['owner_id'])
    op.create_index('ix_submissions_created_at', 'submissions', ['created_at'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.BigInteger(), nullable=False, autoincrement=True),
        sa.Column('principal_id', sa.BigInteger(), nullable=True),
        sa.Column('principal_kind', sa.String(length=20), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.Column('status', sa.String(length=100), nullable=True),
        sa.Column('body', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['principal_id'], ['principals.id'], ondelete='CASCADE'),
        sa.CheckConstraint(
            "(principal_id IS NULL AND principal_kind IS NULL) OR "
            "(principal_id IS NOT NULL AND principal_kind IS NOT NULL)",
            name='ck_notifications_target',
        ),
    )
    op.create_index('idx_notifications_target', 'notifications', ['principal_id', 'principal_kind'])
    op.create_index('ix_notifications_created_at', 'notifications', ['created_at'])


def downgrade() -> None:
    """Drop the casting marketplace tables."""
    op.drop_index('ix_notifications_created_at', table_name='notifications')
    op.drop_index('idx_notifications_target', table_name='notifications')
    op.drop_table('notifications')
    op.drop_index('ix_submissions_created_at', table_name='submissions')
    op.drop_index('ix_submissions_owner_id', table_name='submissions')
    op.drop_table('submissions')
    op.drop_index('idx_hiring_requests_hirer_status', table_name='hiring_requests')
    op.drop_index('ix_hiring_requests_talent_id', table_name='hiring_requests')
    op.drop_index('ix_hiring_requests_hirer_id', table_name='hiring_requests')
    op.drop_table('hiring_requests')
    op.drop_index('ix_principals_reset_token_hash', table_name='principals')
    op.drop_index('ix_principals_email', table_name='principals')
    op.drop_index('ix_principals_kind', table_name='principals')
    op.drop_table('principals')
