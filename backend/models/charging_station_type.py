"""Charging station type model for DB persistence."""
from sqlalchemy import CheckConstraint, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models import Base, new_id

CURRENT_TYPES = ("AC", "DC")


class ChargingStationType(Base):
    """Charging station type table: id, name, plug_count, efficiency, current_type."""

    __tablename__ = "charging_station_type"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    plug_count: Mapped[int] = mapped_column(Integer, nullable=False)
    efficiency: Mapped[float] = mapped_column(Float, nullable=False)
    current_type: Mapped[str] = mapped_column(String(2), nullable=False)

    charging_stations: Mapped[list["ChargingStation"]] = relationship(  # noqa: F821
        back_populates="charging_station_type",
    )

    __table_args__ = (
        CheckConstraint("plug_count >= 0", name="ck_charging_station_type_plug_count"),
        CheckConstraint("current_type IN ('AC', 'DC')", name="ck_charging_station_type_current_type"),
    )
