"""
Court reservation forms using Flask-WTF.
Field names follow the JSON keys the frontend sends.
"""

from flask_wtf import FlaskForm
from wtforms import StringField, FloatField, IntegerField, TextAreaField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Optional, ValidationError

from utils.validators import validate_phone, validate_date_format, validate_time_format


class CourtReservationForm(FlaskForm):
    """Booking request for the basketball court."""

    representativeName = StringField('Representative name', validators=[
        DataRequired(message='Representative name is required'),
        Length(max=200)
    ])

    contactNumber = StringField('Contact number', validators=[
        Optional(),
        Length(max=20)
    ])

    reservationDate = StringField('Reservation date', validators=[
        DataRequired(message='Reservation date is required')
    ])

    startTime = StringField('Start time', validators=[
        DataRequired(message='Start time is required')
    ])

    duration = FloatField('Duration (hours)', validators=[
        InputRequired(message='Duration is required'),
        NumberRange(min=0, max=24, message='Duration must be between 0 and 24 hours')
    ])

    purpose = StringField('Purpose', validators=[
        Optional(),
        Length(max=500)
    ])

    numberOfPeople = IntegerField('Number of people', validators=[
        Optional(),
        NumberRange(min=1, message='Number of people must be at least 1')
    ])

    additionalNotes = TextAreaField('Additional notes', validators=[
        Optional(),
        Length(max=2000)
    ])

    def validate_contactNumber(self, field):
        if field.data and not validate_phone(field.data):
            raise ValidationError('Invalid contact number')

    def validate_reservationDate(self, field):
        if not validate_date_format(str(field.data)[:10]):
            raise ValidationError('Reservation date must be YYYY-MM-DD')

    def validate_startTime(self, field):
        if not validate_time_format(field.data):
            raise ValidationError('Start time must be HH:MM')


class StatusUpdateForm(FlaskForm):
    """Admin status change. Status values are checked by the model."""

    status = StringField('Status', validators=[Optional()])

    adminComment = TextAreaField('Admin comment', validators=[
        Optional(),
        Length(max=1000)
    ])
