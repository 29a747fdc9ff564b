"""Initial schema for Abroadly

Revision ID: 20260101_000000
Revises: None
Create Date: 2026-01-01 00:00:00.000000

This is the initial migration that creates every table of the service:
- Accounts and academic profiles
- University and scholarship catalogue with their join tables
- Favorites of universities and scholarships
- Task tracker (task groups, tasks, subtasks)
- Advisor chats and messages

Catalogue rows are loaded separately with ``abroadly-seed``.

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ENUM, UUID

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260101_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUM_TYPES = (
    "target_level",
    "score_scale",
    "university_type",
    "university_source",
    "scholarship_type",
    "task_priority",
    "task_status",
    "subtask_priority",
)


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables and enum types."""

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_users_email", "email", unique=True),
    )

    # Create profiles table
    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("nationality", sa.String(100), nullable=True),
        sa.Column(
            "target_level",
            ENUM("undergraduate", "master", "phd", "exchange", name="target_level", create_type=True),
            nullable=True,
        ),
        sa.Column("intended_major", sa.String(255), nullable=True),
        sa.Column("intended_country", sa.String(100), nullable=True),
        sa.Column("budget_min", sa.Integer(), nullable=True),
        sa.Column("budget_max", sa.Integer(), nullable=True),
        sa.Column("institution", sa.String(255), nullable=True),
        sa.Column("graduation_year", sa.Integer(), nullable=True),
        sa.Column("academic_score", sa.String(10), nullable=True),
        sa.Column("score_scale", ENUM("gpa4", "percentage", "indo", name="score_scale", create_type=True), nullable=True),
        sa.Column("english_tests", sa.JSON(), nullable=False),
        sa.Column("standardized_tests", sa.JSON(), nullable=False),
        sa.Column("awards", sa.JSON(), nullable=False),
        sa.Column("extracurriculars", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.Index("ix_profiles_user_id", "user_id", unique=True),
    )

    # Create universities table
    op.create_table(
        "universities",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("country", sa.String(100), nullable=False),
        sa.Column("ranking", sa.Integer(), nullable=False),
        sa.Column("student_count", sa.Integer(), nullable=False),
        sa.Column("established_year", sa.Integer(), nullable=False),
        sa.Column("type", ENUM("public", "private", name="university_type", create_type=True), nullable=False),
        sa.Column("tuition_range", sa.String(100), nullable=False),
        sa.Column("acceptance_rate", sa.Numeric(5, 2), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("website", sa.String(255), nullable=False),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("specialties", sa.JSON(), nullable=False),
        sa.Column("campus_size", sa.String(100), nullable=True),
        sa.Column("room_board_cost", sa.String(100), nullable=True),
        sa.Column("books_supplies_cost", sa.String(100), nullable=True),
        sa.Column("personal_expenses_cost", sa.String(100), nullable=True),
        sa.Column("facilities_info", sa.JSON(), nullable=False),
        sa.Column("housing_options", sa.JSON(), nullable=False),
        sa.Column("student_organizations", sa.JSON(), nullable=False),
        sa.Column("dining_options", sa.JSON(), nullable=False),
        sa.Column("transportation_info", sa.JSON(), nullable=False),
        sa.Column(
            "source",
            ENUM("manual", "ai_suggested", name="university_source", create_type=True),
            nullable=False,
            server_default="manual",
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_universities_name", "name"),
        sa.Index("ix_universities_country", "country"),
    )

    # Create scholarships table
    op.create_table(
        "scholarships",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "type",
            ENUM("fully-funded", "partially-funded", "tuition-only", name="scholarship_type", create_type=True),
            nullable=False,
        ),
        sa.Column("amount", sa.String(255), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("requirements", sa.JSON(), nullable=False),
        sa.Column("deadline", sa.String(100), nullable=False),
        sa.Column("provider", sa.String(255), nullable=False),
        sa.Column("country", sa.String(100), nullable=False),
        sa.Column("application_url", sa.String(500), nullable=True),
        sa.Column("eligible_programs", sa.JSON(), nullable=False),
        sa.Column("max_recipients", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_scholarships_name", "name"),
        sa.Index("ix_scholarships_country", "country"),
    )

    # Create university_scholarships table
    op.create_table(
        "university_scholarships",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("university_id", UUID(as_uuid=True), nullable=False),
        sa.Column("scholarship_id", UUID(as_uuid=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["university_id"], ["universities.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["scholarship_id"], ["scholarships.id"], ondelete="CASCADE"),
        sa.Index("ix_university_scholarships_university_id", "university_id"),
        sa.Index("ix_university_scholarships_scholarship_id", "scholarship_id"),
    )

    # Create user_favorites table
    op.create_table(
        "user_favorites",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("university_id", UUID(as_uuid=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["university_id"], ["universities.id"], ondelete="CASCADE"),
        sa.Index("ix_user_favorites_user_id", "user_id"),
        sa.Index("ix_user_favorites_university_id", "university_id"),
    )

    # Create user_scholarship_favorites table
    op.create_table(
        "user_scholarship_favorites",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("scholarship_id", UUID(as_uuid=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["scholarship_id"], ["scholarships.id"], ondelete="CASCADE"),
        sa.Index("ix_user_scholarship_favorites_user_id", "user_id"),
        sa.Index("ix_user_scholarship_favorites_scholarship_id", "scholarship_id"),
    )

    # Create task_groups table
    op.create_table(
        "task_groups",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("color", sa.String(50), nullable=False, server_default="bg-blue-500"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.Index("ix_task_groups_user_id", "user_id"),
    )

    # Create tasks table
    op.create_table(
        "tasks",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column(
            "priority",
            ENUM("MUST", "NEED", "NICE", name="task_priority", create_type=True),
            nullable=False,
            server_default="NEED",
        ),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column(
            "status",
            ENUM("todo", "in_progress", "completed", name="task_status", create_type=True),
            nullable=False,
            server_default="todo",
        ),
        sa.Column("group_ids", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.Index("ix_tasks_user_id", "user_id"),
    )

    # Create subtasks table
    op.create_table(
        "subtasks",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("task_id", UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "priority",
            ENUM("low", "medium", "high", name="subtask_priority", create_type=True),
            nullable=False,
            server_default="medium",
        ),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["task_id"], ["tasks.id"], ondelete="CASCADE"),
        sa.Index("ix_subtasks_task_id", "task_id"),
    )

    # Create chats table
    op.create_table(
        "chats",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.Index("ix_chats_user_id", "user_id"),
        sa.Index("ix_chats_updated_at", "updated_at"),
    )

    # Create messages table
    op.create_table(
        "messages",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("chat_id", UUID(as_uuid=True), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["chat_id"], ["chats.id"], ondelete="CASCADE"),
        sa.Index("ix_messages_chat_id", "chat_id"),
        sa.Index("ix_messages_created_at", "created_at"),
    )


def downgrade() -> None:
    """Drop all tables and enum types."""
    op.drop_table("messages")
    op.drop_table("chats")
    op.drop_table("subtasks")
    op.drop_table("tasks")
    op.drop_table("task_groups")
    op.drop_table("user_scholarship_favorites")
    op.drop_table("user_favorites")
    op.drop_table("university_scholarships")
    op.drop_table("scholarships")
    op.drop_table("universities")
    op.drop_table("profiles")
    op.drop_table("users")

    for enum_name in ENUM_TYPES:
        op.execute(f"DROP TYPE IF EXISTS {enum_name}")
