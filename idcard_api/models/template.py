# idcard_api/models/template.py
"""ID card template; its data tags drive the bulk-import spreadsheet columns."""
from sqlalchemy import JSON, Column, ForeignKey, Index, String, Uuid

from .base import Base


class Template(Base):
    __tablename__ = "templates"

    school_id = Column(Uuid, ForeignKey("schools.id"), nullable=False)
    type = Column(String(20), nullable=False)
    layout_config = Column(JSON, nullable=False, default=dict)
    data_tags = Column(JSON, nullable=False, default=list)

    __table_args__ = (
        Index("ix_templates_school_type", "school_id", "type"),
    )
