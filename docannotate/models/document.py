
from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship
from docannotate.db.session import Base, UTCDateTime
from docannotate.utils.ids import new_id, utcnow

class Document(Base):
    __tablename__ = "documents"
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    type = Column(String(20), nullable=False)
    uploaded_at = Column(UTCDateTime, nullable=False, default=utcnow, index=True)

    comments = relationship("Comment", back_populates="document", cascade="all, delete-orphan")
    highlights = relationship("Highlight", back_populates="document", cascade="all, delete-orphan")
    relations = relationship("Relation", back_populates="document", cascade="all, delete-orphan")

    @property
    def line_count(self) -> int:
        return len((self.content or "").split("\n"))
