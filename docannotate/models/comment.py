from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from docannotate.db.session import Base, UTCDateTime
from docannotate.utils.ids import new_id, utcnow

class Comment(Base):
    __tablename__ = "comments"
    id = Column(String(36), primary_key=True, default=new_id)
    document_id = Column(String(36), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False, index=True)
    line_number = Column(Integer, nullable=False)
    author = Column(String(50), nullable=False)
    content = Column(Text, nullable=False)
    # soft self-reference, no FK: replies are refused deletion instead of cascaded
    parent_comment_id = Column(String(36), nullable=True, index=True)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    document = relationship("Document", back_populates="comments")

    @property
    def is_reply(self) -> bool:
        return self.parent_comment_id is not None
