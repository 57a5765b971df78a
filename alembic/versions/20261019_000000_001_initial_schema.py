"""Initial schema: users, recipes, preferences, allergies, cuisines, feedback.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("image", sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "cuisines",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("region", sa.String(length=100), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    # Canonical ingredients, names stored lowercased
    op.create_table(
        "ingredients",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False, server_default="other"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "recipes",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(length=500), nullable=True),
        sa.Column("cooking_time", sa.Integer(), nullable=True),
        sa.Column("servings", sa.Integer(), nullable=True),
        sa.Column("difficulty", sa.String(length=20), nullable=True),
        sa.Column("cuisine_type", sa.String(length=100), nullable=True),
        sa.Column("cuisine_id", sa.String(length=32), nullable=True),
        sa.Column("author_id", sa.String(length=32), nullable=True),
        sa.Column("is_vegetarian", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_vegan", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_gluten_free", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_nut_free", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_low_fodmap", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_lactose_free", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_pescatarian", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_fermented", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("needs_dietary_review", sa.Boolean(), nullable=False, server_default="false"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["cuisine_id"], ["cuisines.id"]),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_recipes_title", "recipes", ["title"])

    op.create_table(
        "recipe_ingredients",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("recipe_id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("amount", sa.Float(), nullable=True),
        sa.Column("unit", sa.String(length=50), nullable=True),
        sa.Column("notes", sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(["recipe_id"], ["recipes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "instructions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("recipe_id", sa.String(length=32), nullable=False),
        sa.Column("step_number", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["recipe_id"], ["recipes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )

    # Favorites: one edge per (user, recipe)
    op.create_table(
        "user_favorites",
        sa.Column("user_id", sa.String(length=32), nullable=False),
        sa.Column("recipe_id", sa.String(length=32), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["recipe_id"], ["recipes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "recipe_id"),
    )

    op.create_table(
        "preferences",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=32), nullable=False),
        sa.Column("cooking_time", sa.String(length=20), nullable=False),
        sa.Column("skill_level", sa.String(length=20), nullable=False),
        sa.Column("serving_size", sa.Integer(), nullable=False),
        sa.Column("meal_prep", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("diet_types", sa.JSON(), nullable=False),
        sa.Column("excluded_foods", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )

    op.create_table(
        "allergies",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=32), nullable=False),
        sa.Column("ingredient_id", sa.Integer(), nullable=False),
        sa.Column(
            "severity",
            sa.Enum("mild", "moderate", "severe", name="allergyseverity"),
            nullable=False,
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["ingredient_id"], ["ingredients.id"]),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "cuisine_preferences",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=32), nullable=False),
        sa.Column("cuisine_id", sa.String(length=32), nullable=False),
        sa.Column(
            "level",
            sa.Enum("love", "like", "neutral", "dislike", name="preferencelevel"),
            nullable=False,
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["cuisine_id"], ["cuisines.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "cuisine_id"),
    )

    # Append-only dietary feedback
    op.create_table(
        "dietary_feedback",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("recipe_id", sa.String(length=32), nullable=False),
        sa.Column("low_fodmap_incorrect", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("fermented_incorrect", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("pescatarian_incorrect", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("current_analysis", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["recipe_id"], ["recipes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_dietary_feedback_recipe_id", "dietary_feedback", ["recipe_id"])


def downgrade() -> None:
    op.drop_index("ix_dietary_feedback_recipe_id", table_name="dietary_feedback")
    op.drop_table("dietary_feedback")
    op.drop_table("cuisine_preferences")
    op.drop_table("allergies")
    op.drop_table("preferences")
    op.drop_table("user_favorites")
    op.drop_table("instructions")
    op.drop_table("recipe_ingredients")
    op.drop_index("ix_recipes_title", table_name="recipes")
    op.drop_table("recipes")
    op.drop_table("ingredients")
    op.drop_table("cuisines")
    op.drop_table("users")
    if op.get_bind().dialect.name == "postgresql":
        op.execute("DROP TYPE IF EXISTS preferencelevel")
        op.execute("DROP TYPE IF EXISTS allergyseverity")
