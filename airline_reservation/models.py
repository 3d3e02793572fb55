"""Domain records: flights with their seat grid, reservations, waiting lists and users."""
import enum
from dataclasses import dataclass, field

from airline_reservation.exceptions import BookingError, ValidationError
from airline_reservation.seating import SeatGrid

DEFAULT_STATUS = 'On Time'
CONFIRMED = 'Confirmed'


class Flight:
    """A scheduled flight owning the seat grid of its plane."""

    def __init__(self, flight_id, airline_name, plane_id, capacity, destination,
                 departure_time, arrival_time, status=DEFAULT_STATUS, grid=None):
        # bool is an int subclass, reject it explicitly
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ValidationError("Capacity must be a whole number greater than zero")
        self.flight_id = flight_id
        self.airline_name = airline_name
        self.plane_id = plane_id
        self.capacity = capacity
        self.destination = destination
        self.departure_time = departure_time
        self.arrival_time = arrival_time
        self.status = status
        self.grid = grid or SeatGrid(capacity)
        self.available_seats = self.grid.available_count()

    @property
    def layout(self):
        return self.grid.layout

    def change_capacity(self, capacity):
        """Re-lay out the cabin for a new capacity; only allowed while no seat is booked."""
        if self.available_seats != self.capacity:
            raise BookingError("Cannot change the capacity of a flight with booked seats")
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ValidationError("Capacity must be a whole number greater than zero")
        self.capacity = capacity
        self.grid = SeatGrid(capacity)
        self.available_seats = capacity

    def is_seat_available(self, seat_number):
        row, col = self.grid.decode(seat_number)
        return self.grid.is_available(row, col)

    def book_seat(self, seat_number):
        row, col = self.grid.decode(seat_number)
        self.grid.occupy(row, col)
        self.available_seats -= 1

    def cancel_seat(self, seat_number):
        row, col = self.grid.decode(seat_number)
        self.grid.release(row, col)
        self.available_seats += 1

    def first_available_seat(self):
        """Label of the first free seat, or None when the flight is full."""
        cell = self.grid.first_available()
        return self.grid.encode(*cell) if cell else None

    def is_fully_booked(self):
        return self.available_seats == 0

    def seat_map(self):
        """Render the seat grid: O available, X taken or not a seat, | aisle."""
        lines = [
            f"Seat Map for Flight {self.flight_id} ({self.airline_name}):",
            f"Destination: {self.destination}",
            f"Available Seats: {self.available_seats} out of {self.capacity}",
            "",
        ]

        header = ['    ']
        letter = ord('A')
        for col in range(self.grid.column_count):
            if self.layout.is_aisle(col):
                header.append('    ')
            else:
                header.append(f"{chr(letter)}   ")
                letter += 1
        lines.append(''.join(header).rstrip())

        for index, row in enumerate(self.grid.cells):
            cells = []
            for col, occupied in enumerate(row):
                if self.layout.is_aisle(col):
                    cells.append('|')
                else:
                    cells.append('X' if occupied else 'O')
            lines.append(f"{index + 1:>2}  " + '   '.join(cells))

        lines.append("")
        lines.append("Legend: O - Available, X - Occupied, | - Aisle")
        return '\n'.join(lines)

    def to_record(self):
        """Fields in the order of a flights.txt line."""
        return [
            self.flight_id,
            self.airline_name,
            self.plane_id,
            str(self.capacity),
            str(self.available_seats),
            self.destination,
            self.departure_time,
            self.arrival_time,
            self.status,
        ]

    def __repr__(self):
        return f"<Flight {self.flight_id} {self.airline_name} to {self.destination}>"


@dataclass
class Reservation:
    reservation_id: str
    passenger_name: str
    flight_id: str
    airline_name: str
    destination: str
    seat_number: str
    username: str
    status: str = CONFIRMED
    payment_method: str = ''

    def to_record(self):
        """Fields in the order of a reservations.txt line."""
        return [
            self.reservation_id,
            self.passenger_name,
            self.flight_id,
            self.airline_name,
            self.destination,
            self.seat_number,
            self.status,
            self.username,
            self.payment_method,
        ]


@dataclass
class WaitingList:
    """First come, first served queue of passengers for a full flight."""
    flight_id: str
    passengers: list = field(default_factory=list)  # (username, passenger name)

    def add_passenger(self, username, passenger_name):
        self.passengers.append((username, passenger_name))

    def remove_passenger(self, username):
        """Drop the first entry for `username`; returns False when absent."""
        for index, (name, _) in enumerate(self.passengers):
            if name == username:
                del self.passengers[index]
                return True
        return False

    def next_passenger(self):
        return self.passengers[0] if self.passengers else None

    def __contains__(self, username):
        return any(name == username for name, _ in self.passengers)

    def __len__(self):
        return len(self.passengers)

    def is_empty(self):
        return not self.passengers


class Role(str, enum.Enum):
    ADMIN = 'admin'
    CUSTOMER = 'customer'


@dataclass
class User:
    username: str
    password: str
    name: str
    role: Role = Role.CUSTOMER

    @property
    def is_admin(self):
        return self.role is Role.ADMIN

    def to_record(self):
        return [self.username, self.password, self.name, self.role.value]
