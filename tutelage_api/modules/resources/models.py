"""Parent content tables that task PDFs can be attached to.

Only identity matters here: the attachment registry checks that a row with
the given primary key exists. The full content schemas live with the CMS.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from tutelage_api.core.database.base import BaseModel


class ContentResource(BaseModel):
    """Common shape of a content item (title only)."""

    __abstract__ = True

    title: Mapped[str] = mapped_column(String(250), nullable=False)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.id}>"


class Video(ContentResource):
    __tablename__ = "videos"


class Audio(ContentResource):
    __tablename__ = "audios"


class Speaking(ContentResource):
    __tablename__ = "speakings"


class Writing(ContentResource):
    __tablename__ = "writings"


class Reading(ContentResource):
    __tablename__ = "readings"


class Story(ContentResource):
    __tablename__ = "stories"


class Blog(ContentResource):
    __tablename__ = "blogs"


class EslVideo(ContentResource):
    __tablename__ = "esl_videos"


class EslAudio(ContentResource):
    __tablename__ = "esl_audios"
