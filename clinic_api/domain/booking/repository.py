"""Booking repository - Database operations for appointments and rentals"""

from datetime import date

from sqlalchemy.orm import Session

from ...models import Appointment, Rental, WebAppointment


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def get_rentals_covering(db: Session, day: date) -> list[Rental]:
        """Rentals whose inclusive date range contains the day"""
        return db.query(Rental).filter(Rental.start_date <= day, Rental.end_date >= day).all()

    @staticmethod
    def get_appointments_on(db: Session, day: date) -> list[Appointment]:
        return db.query(Appointment).filter(Appointment.date == day).all()

    @staticmethod
    def get_web_appointments_on(db: Session, day: date) -> list[WebAppointment]:
        return db.query(WebAppointment).filter(WebAppointment.date == day).all()

    @staticmethod
    def create_web_appointment(db: Session, **appointment_data) -> WebAppointment:
        """Insert a web appointment; the (date, time) unique constraint may raise IntegrityError"""
        appointment = WebAppointment(**appointment_data)
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment
