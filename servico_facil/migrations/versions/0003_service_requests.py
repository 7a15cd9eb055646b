from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0003_service_requests"
down_revision = "0002_reviews_subscriptions"
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        "service_requests",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("client_id", sa.String(length=64), nullable=False),
        sa.Column("client_name", sa.String(length=120), nullable=False),
        sa.Column("service_type", sa.String(length=120), nullable=False),
        sa.Column("lat", sa.Float, nullable=False),
        sa.Column("lon", sa.Float, nullable=False),
        sa.Column("address", sa.Text, nullable=False),
        sa.Column("radius_km", sa.Float, nullable=False, server_default="5"),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()")),
    )
    op.create_index("ix_service_requests_client_id", "service_requests", ["client_id"])
    op.create_index("ix_service_requests_status", "service_requests", ["status"])

def downgrade() -> None:
    op.drop_index("ix_service_requests_status", table_name="service_requests")
    op.drop_index("ix_service_requests_client_id", table_name="service_requests")
    op.drop_table("service_requests")
