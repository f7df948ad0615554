from datetime import datetime
from sqlalchemy import Column, DateTime
from sqlalchemy.sql import func
from settings.database import Base


class BaseModel(Base):
    __abstract__ = True

    created_on = Column(DateTime, server_default=func.now(), nullable=False)
    modified_on = Column(DateTime, server_default=func.now(), onupdate=datetime.utcnow, nullable=False)
