from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from docannotate.db.session import Base
from docannotate.utils.ids import new_id

class Highlight(Base):
    __tablename__ = "highlights"
    __table_args__ = (UniqueConstraint("document_id", "line_number", name="uq_highlight_line"),)

    id = Column(String(36), primary_key=True, default=new_id)
    document_id = Column(String(36), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False, index=True)
    line_number = Column(Integer, nullable=False)

    document = relationship("Document", back_populates="highlights")
