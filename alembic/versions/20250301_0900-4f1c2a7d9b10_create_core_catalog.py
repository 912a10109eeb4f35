"""Create core catalog tables

Revision ID: 4f1c2a7d9b10
Revises:
Create Date: 2025-03-01 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '4f1c2a7d9b10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create user, file, manufacturer and model tables"""

    op.create_table('user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('reset_token', sa.String(255), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )

    op.create_table('file',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('public_id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('file_name', sa.String(255), nullable=False),
        sa.Column('original_name', sa.String(255), nullable=False),
        sa.Column('mime_type', sa.String(100), nullable=False),
        sa.Column('file_size', sa.Integer(), nullable=False),
        sa.Column('file_path', sa.String(500), nullable=False),
        sa.Column('bucket', sa.String(100), nullable=False),
        sa.Column('provider', sa.String(50), nullable=False),
        sa.Column('uploaded_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['uploaded_by'], ['user.id'], ),
        sa.UniqueConstraint('public_id')
    )

    op.create_table('manufacturer',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('public_id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('display_name', sa.String(100), nullable=False),
        sa.Column('slug', sa.String(100), nullable=False),
        sa.Column('logo_image_id', sa.Integer(), nullable=True),
        sa.Column('country_code', sa.CHAR(2), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default='TRUE', nullable=False),
        sa.Column('is_verified', sa.Boolean(), server_default='FALSE', nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('updated_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['logo_image_id'], ['file.id'], ),
        sa.UniqueConstraint('public_id'),
        sa.UniqueConstraint('name'),
        sa.UniqueConstraint('slug'),
        sa.CheckConstraint("country_code ~ '^[A-Z]{2}$'", name='manufacturer_country_code_check')
    )
    op.create_index('idx_manufacturer_is_active', 'manufacturer', ['is_active'])
    op.create_index('idx_manufacturer_country_code', 'manufacturer', ['country_code'])

    op.create_table('model',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('public_id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('manufacturer_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('code', sa.String(50), nullable=True),
        sa.Column('generation', sa.String(50), nullable=True),
        sa.Column('production_start', sa.Integer(), nullable=True),
        sa.Column('production_end', sa.Integer(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('updated_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['manufacturer_id'], ['manufacturer.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('public_id'),
        sa.UniqueConstraint('manufacturer_id', 'name', 'generation'),
        sa.CheckConstraint(
            'production_end IS NULL OR production_end >= production_start',
            name='model_production_years_check'
        )
    )
    op.create_index('idx_model_manufacturer_id', 'model', ['manufacturer_id'])


def downgrade() -> None:
    op.drop_index('idx_model_manufacturer_id', table_name='model')
    op.drop_table('model')
    op.drop_index('idx_manufacturer_country_code', table_name='manufacturer')
    op.drop_index('idx_manufacturer_is_active', table_name='manufacturer')
    op.drop_table('manufacturer')
    op.drop_table('file')
    op.drop_table('user')
