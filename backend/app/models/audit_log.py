"""
Audit Log Database Model.

Tracks changes to vehicles and trips.
"""

from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.sql import func
from backend.app.db.session import Base


class AuditLog(Base):
    """
    Audit log model for tracking data changes.

    Events logged:
    - VEHICLE_CREATED / VEHICLE_UPDATED / VEHICLE_DELETED
    - TRIP_CREATED / TRIP_UPDATED / TRIP_DELETED
    """
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Who performed the action
    actor_id = Column(String(100), index=True, nullable=True)

    # What action was performed
    action = Column(String(100), nullable=False, index=True)

    # Which record was affected
    entity_type = Column(String(50), nullable=True)
    entity_id = Column(Integer, index=True, nullable=True)

    # Additional context (JSON for flexibility)
    meta_data = Column(JSON, nullable=True)

    # Timestamp
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    def __repr__(self):
        return f"<AuditLog(id={self.id}, action='{self.action}', actor={self.actor_id}, entity={self.entity_type}:{self.entity_id})>"
