from sqlalchemy import Column, String, JSON
from billing.database import Base


class Setting(Base):
    """Runtime key/value configuration (tax rate, prefixes, numbering counters)."""
    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(JSON, nullable=False)
