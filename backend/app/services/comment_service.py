"""
Comment service for short comments on photos.
"""
from sqlalchemy.orm import Session
from app.core.exceptions import NotFoundError, ForbiddenError
from app.models.user import User
from app.models.photo import Comment
from app.services.travel_queries import get_photo


def get_comment(comment_id: int, db: Session) -> Comment:
    comment = db.query(Comment).filter(Comment.id == comment_id).first()
    if not comment:
        raise NotFoundError(f"Comment not found: {comment_id}")
    return comment


def create_comment(photo_id: int, content: str, writer: User, db: Session) -> Comment:
    """Any signed-in user may comment on a photo."""
    photo = get_photo(photo_id, db)
    comment = Comment(
        photo_id=photo.id,
        writer_id=writer.id,
        content=content
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


def update_comment(comment_id: int, content: str, requester: User, db: Session) -> Comment:
    """Only the writer may edit a comment."""
    comment = get_comment(comment_id, db)
    if comment.writer_id != requester.id:
        raise ForbiddenError("You can only edit your own comments")

    comment.content = content
    db.commit()
    db.refresh(comment)
    return comment


def delete_comment(comment_id: int, requester: User, db: Session) -> None:
    """The writer or the photo owner may delete a comment."""
    comment = get_comment(comment_id, db)
    photo = get_photo(comment.photo_id, db)

    if comment.writer_id != requester.id and photo.user_id != requester.id:
        raise ForbiddenError("You are not allowed to delete this comment")

    db.delete(comment)
    db.commit()
