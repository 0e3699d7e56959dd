from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class Appointment(Base):
    """Walk-in appointment loaded by the back office"""

    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    client_name = Column(String(255), nullable=True)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=True)  # null means one slot long
    created_at = Column(DateTime, server_default=func.now())


class WebAppointment(Base):
    """Appointment requested through the public booking form"""

    __tablename__ = "web_appointments"
    # Two web bookings can never share a slot, whatever the pre-check said
    __table_args__ = (UniqueConstraint("date", "time", name="uq_web_appointments_slot"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    date = Column(Date, nullable=False, index=True)
    time = Column(Time, nullable=False)
    zones = Column(JSON, nullable=False, default=list)
    message = Column(Text, nullable=True)
    # Status workflow: pendiente → confirmado / cancelado (back office)
    status = Column(String(50), default="pendiente", nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class Location(Base):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)

    rentals = relationship("Rental", back_populates="location")


class Rental(Base):
    """Equipment rented out to another location; blocks every day in the range"""

    __tablename__ = "rentals"

    id = Column(Integer, primary_key=True, index=True)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    location = relationship("Location", back_populates="rentals")


class Lead(Base):
    """Contact captured by the prize wheel. One claim per email or WhatsApp, ever."""

    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=True, index=True)
    whatsapp = Column(String(50), unique=True, nullable=True, index=True)
    prize_won = Column(String(255), nullable=False)
    source = Column(String(50), default="roulette", nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class SiteMetric(Base):
    __tablename__ = "site_metrics"

    metric_name = Column(String(100), primary_key=True)
    value = Column(Integer, default=0, nullable=False)


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    excerpt = Column(Text, nullable=True)
    content = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)
    is_published = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
