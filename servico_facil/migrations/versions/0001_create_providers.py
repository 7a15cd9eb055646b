from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_create_providers"
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        "providers",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uid", sa.String(length=64), nullable=False, unique=True),
        sa.Column("role", sa.String(length=16), nullable=False, server_default="provider"),
        sa.Column("is_profile_complete", sa.Boolean, nullable=False, server_default=sa.text("false")),
        sa.Column("display_name", sa.String(length=120), nullable=True),
        sa.Column("service_type", sa.String(length=120), nullable=True),
        sa.Column("neighborhood", sa.String(length=120), nullable=True),
        sa.Column("photo_url", sa.Text, nullable=True),
        sa.Column("rating", sa.Float, nullable=False, server_default="0"),
        sa.Column("review_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="available"),
        sa.Column("lat", sa.Float, nullable=True),
        sa.Column("lon", sa.Float, nullable=True),
        sa.Column("is_premium", sa.Boolean, nullable=False, server_default=sa.text("false")),
        sa.Column("premium_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()")),
    )
    op.create_index("ix_providers_role_complete", "providers", ["role", "is_profile_complete"])
    op.create_index("ix_providers_premium", "providers", ["is_premium"])

def downgrade() -> None:
    op.drop_index("ix_providers_premium", table_name="providers")
    op.drop_index("ix_providers_role_complete", table_name="providers")
    op.drop_table("providers")
