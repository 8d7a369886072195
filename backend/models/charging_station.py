"""Charging station model for DB persistence."""
from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models import Base, new_id


class ChargingStation(Base):
    """Charging station table: id, name, device_id, ip_address, firmware_version, charging_station_type_id."""

    __tablename__ = "charging_station"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # Hardware identifier; several stations may report the same one.
    device_id: Mapped[str] = mapped_column(String(36), nullable=False)
    ip_address: Mapped[str] = mapped_column(String(45), nullable=False)
    firmware_version: Mapped[str] = mapped_column(String(255), nullable=False)
    charging_station_type_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("charging_station_type.id"),
        nullable=False,
    )

    charging_station_type: Mapped["ChargingStationType"] = relationship(  # noqa: F821
        back_populates="charging_stations",
    )
    connectors: Mapped[list["Connector"]] = relationship(back_populates="charging_station")  # noqa: F821
