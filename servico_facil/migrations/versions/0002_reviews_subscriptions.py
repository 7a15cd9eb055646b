from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0002_reviews_subscriptions"
down_revision = "0001_create_providers"
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        "reviews",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("provider_uid", sa.String(length=64), sa.ForeignKey("providers.uid"), nullable=False),
        sa.Column("client_id", sa.String(length=64), nullable=False),
        sa.Column("client_name", sa.String(length=120), nullable=False),
        sa.Column("rating", sa.Integer, nullable=False),
        sa.Column("comment", sa.Text, nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()")),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating"),
    )
    op.create_index("ix_reviews_provider_uid", "reviews", ["provider_uid"])
    op.create_index("ix_reviews_client_id", "reviews", ["client_id"])

    op.create_table(
        "subscriptions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("provider_uid", sa.String(length=64), sa.ForeignKey("providers.uid"), nullable=False),
        sa.Column("plan_id", sa.String(length=64), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="active"),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("payment_method", sa.String(length=16), nullable=False),
        sa.Column("transaction_id", sa.String(length=64), nullable=True),
    )
    op.create_index("ix_subscriptions_provider_uid", "subscriptions", ["provider_uid"])

def downgrade() -> None:
    op.drop_index("ix_subscriptions_provider_uid", table_name="subscriptions")
    op.drop_table("subscriptions")
    op.drop_index("ix_reviews_client_id", table_name="reviews")
    op.drop_index("ix_reviews_provider_uid", table_name="reviews")
    op.drop_table("reviews")
