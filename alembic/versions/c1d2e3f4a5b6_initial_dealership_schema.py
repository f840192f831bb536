"""initial dealership schema: users, cars, car_images, sell_inquiries

Revision ID: c1d2e3f4a5b6
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "c1d2e3f4a5b6"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=False, server_default="user"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_phone"), "users", ["phone"], unique=True)

    op.create_table(
        "cars",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column("brand", sa.String(80), nullable=False),
        sa.Column("model", sa.String(120), nullable=False),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("fuel_type", sa.String(20), nullable=False, server_default="Petrol"),
        sa.Column("km_driven", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(20), nullable=False, server_default="available"),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("contact_phone", sa.String(32), nullable=True),
        sa.Column("contact_whatsapp", sa.String(32), nullable=True),
        sa.Column("sold_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_cars_owner_id"), "cars", ["owner_id"], unique=False)
    op.create_index(op.f("ix_cars_brand"), "cars", ["brand"], unique=False)
    op.create_index(op.f("ix_cars_status"), "cars", ["status"], unique=False)
    op.create_index(op.f("ix_cars_created_at"), "cars", ["created_at"], unique=False)

    op.create_table(
        "car_images",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("car_id", sa.UUID(), nullable=False),
        sa.Column("image_url", sa.String(512), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["car_id"], ["cars.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_car_images_car_id"), "car_images", ["car_id"], unique=False)

    op.create_table(
        "sell_inquiries",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("owner_name", sa.String(120), nullable=False),
        sa.Column("phone", sa.String(32), nullable=False),
        sa.Column("whatsapp", sa.String(32), nullable=True),
        sa.Column("brand", sa.String(80), nullable=False),
        sa.Column("model", sa.String(120), nullable=False),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("km_driven", sa.Integer(), nullable=True),
        sa.Column("fuel_type", sa.String(20), nullable=True),
        sa.Column("transmission", sa.String(20), nullable=True),
        sa.Column("expected_price", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_sell_inquiries_status"), "sell_inquiries", ["status"], unique=False)
    op.create_index(op.f("ix_sell_inquiries_created_at"), "sell_inquiries", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_sell_inquiries_created_at"), table_name="sell_inquiries")
    op.drop_index(op.f("ix_sell_inquiries_status"), table_name="sell_inquiries")
    op.drop_table("sell_inquiries")
    op.drop_index(op.f("ix_car_images_car_id"), table_name="car_images")
    op.drop_table("car_images")
    op.drop_index(op.f("ix_cars_created_at"), table_name="cars")
    op.drop_index(op.f("ix_cars_status"), table_name="cars")
    op.drop_index(op.f("ix_cars_brand"), table_name="cars")
    op.drop_index(op.f("ix_cars_owner_id"), table_name="cars")
    op.drop_table("cars")
    op.drop_index(op.f("ix_users_phone"), table_name="users")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
