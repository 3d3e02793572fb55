"""Console airline reservation simulator with flat-file storage."""

from airline_reservation.exceptions import BookingError, FileOperationError, ReservationError, ValidationError
from airline_reservation.models import Flight, Reservation, Role, User, WaitingList
from airline_reservation.seating import SeatGrid, build_grid, compute_layout, decode_seat, encode_seat
from airline_reservation.services import ReservationSystem
from airline_reservation.storage import FlatFileStore

__version__ = '0.1.0'
