from sqlalchemy import Column, Integer, String, Text, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from docannotate.db.session import Base, UTCDateTime
from docannotate.utils.ids import new_id, utcnow

class Relation(Base):
    __tablename__ = "relations"
    id = Column(String(36), primary_key=True, default=new_id)
    document_id = Column(String(36), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(Text, nullable=False)
    note = Column(Text, nullable=True)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    document = relationship("Document", back_populates="relations")
    spans = relationship(
        "RelationSpan",
        back_populates="relation",
        cascade="all, delete-orphan",
        order_by="RelationSpan.start_line",
        lazy="selectin",
    )

class RelationSpan(Base):
    __tablename__ = "relation_spans"
    __table_args__ = (
        CheckConstraint("start_line >= 1", name="ck_span_start_positive"),
        CheckConstraint("start_line <= end_line", name="ck_span_ordered"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    relation_id = Column(String(36), ForeignKey("relations.id", ondelete="CASCADE"), nullable=False, index=True)
    start_line = Column(Integer, nullable=False)
    end_line = Column(Integer, nullable=False)

    relation = relationship("Relation", back_populates="spans")
