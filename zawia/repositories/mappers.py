"""Row -> domain model conversion."""

from zawia.db.tables import IdeaRow, NotificationRow, PostRow, SpaceRow, UserProfileRow
from zawia.models.compass import Compass
from zawia.models.workspace import Idea, Notification, Post, Space, UserProfile


def profile_from_row(row: UserProfileRow) -> UserProfile:
    return UserProfile(
        user_id=row.user_id,
        name=row.name,
        email=row.email,
        avatar_url=row.avatar_url or "",
        avatar_color=row.avatar_color,
        avatar_text=row.avatar_text,
    )


def post_from_row(row: PostRow) -> Post:
    return Post(
        post_id=row.post_id,
        space_id=row.space_id,
        title=row.title,
        content=row.content or "",
        platform=row.platform,
        post_type=row.post_type,
        status=row.status,
        content_type=row.content_type,
        pillar=row.pillar,
        field_values=row.field_values or {},
        scheduled_at=row.scheduled_at,
        created_by=row.created_by,
        last_modified_by=row.last_modified_by,
        image_url=row.image_url,
        activity_log=row.activity_log or [],
    )


def idea_from_row(row: IdeaRow) -> Idea:
    return Idea(
        idea_id=row.idea_id,
        space_id=row.space_id,
        content=row.content,
        content_type=row.content_type,
        pillar=row.pillar,
        created_by=row.created_by,
        created_at=row.created_at,
    )


def notification_from_row(row: NotificationRow) -> Notification:
    return Notification(
        notification_id=row.notification_id,
        user_id=row.user_id,
        message=row.message,
        link=row.link,
        read=row.read,
        created_at=row.created_at,
    )


def space_from_row(
    row: SpaceRow,
    *,
    posts: list[PostRow] | None = None,
    ideas: list[IdeaRow] | None = None,
) -> Space:
    """Snapshot a space row. The result does not track later row changes."""
    return Space(
        space_id=row.space_id,
        name=row.name,
        description=row.description or "",
        team=list(row.team or []),
        member_ids=list(row.member_ids or []),
        invite_token=row.invite_token,
        compass=Compass.model_validate(row.compass) if row.compass else None,
        version=row.version,
        posts=[post_from_row(p) for p in posts or []],
        ideas=[idea_from_row(i) for i in ideas or []],
        created_by=row.created_by,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
