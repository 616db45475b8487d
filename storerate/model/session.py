from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship
from storerate.model.base import Base
from storerate.model.user import User


class Session(Base):
    """Server-side login session; the cookie only carries a signed ``id``."""

    __tablename__ = "sessions"

    id = Column(String, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    expires_at = Column(DateTime, index=True, nullable=False)

    user = relationship(User)
