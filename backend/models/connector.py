"""Connector model for DB persistence."""
from sqlalchemy import Boolean, ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models import Base, new_id


class Connector(Base):
    """Connector table: id, name, priority, charging_station_id."""

    __tablename__ = "connector"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    priority: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    charging_station_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("charging_station.id"),
        nullable=False,
    )

    charging_station: Mapped["ChargingStation"] = relationship(back_populates="connectors")  # noqa: F821

    # At most one priority connector per station, enforced by the database as well.
    __table_args__ = (
        Index(
            "uq_connector_priority_per_station",
            "charging_station_id",
            unique=True,
            sqlite_where=text("priority = 1"),
            postgresql_where=text("priority IS TRUE"),
        ),
    )
