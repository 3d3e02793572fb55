# Flat-file persistence: one comma-separated text file per record type plus
# one file per flight for its seat map and waiting list.
import csv
import os
from pathlib import Path

from loguru import logger

from airline_reservation.exceptions import FileOperationError, ValidationError
from airline_reservation.models import Flight, Reservation, Role, User, WaitingList
from airline_reservation.seating import SeatGrid

FLIGHTS_FILE = 'flights.txt'
RESERVATIONS_FILE = 'reservations.txt'
USERS_FILE = 'users.txt'
SEATMAP_DIR = 'seatmaps'
WAITINGLIST_DIR = 'waitinglists'

FLIGHT_FIELDS = 9
RESERVATION_FIELDS = 8  # payment method is optional
USER_FIELDS = 4


class FlatFileStore:
    """Reads and writes all reservation system data under one directory."""

    def __init__(self, data_dir):
        self.data_dir = Path(data_dir)

    def initialize(self):
        """Create the data directory and its per-flight subdirectories."""
        for path in (self.data_dir, self.data_dir / SEATMAP_DIR, self.data_dir / WAITINGLIST_DIR):
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise FileOperationError(f"Failed to create directory {path}: {e}", path) from e

    def seatmap_path(self, flight_id):
        return self.data_dir / SEATMAP_DIR / f"{flight_id}.txt"

    def waitinglist_path(self, flight_id):
        return self.data_dir / WAITINGLIST_DIR / f"{flight_id}.txt"

    # --- Low level ---

    def read_rows(self, path):
        """All comma-separated rows of a file; a missing file reads as empty."""
        path = Path(path)
        if not path.exists():
            return []
        try:
            with open(path, 'r', newline='', encoding='utf-8') as f:
                return [row for row in csv.reader(f) if row]
        except (OSError, UnicodeDecodeError) as e:
            raise FileOperationError(f"Failed to read {path}: {e}", path) from e

    def write_rows(self, path, rows):
        """Overwrite a file with rows; an empty row list deletes the file."""
        path = Path(path)
        if not rows:
            self.delete_file(path)
            return
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', newline='', encoding='utf-8') as f:
                writer = csv.writer(f, lineterminator='\n')
                writer.writerows(rows)
        except OSError as e:
            raise FileOperationError(f"Failed to write {path}: {e}", path) from e

    def delete_file(self, path):
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise FileOperationError(f"Failed to delete {path}: {e}", path) from e

    # --- Flights and seat maps ---

    def load_flights(self):
        """Load every flight with its seat grid.

        Returns (flights, rebuilt_ids): rebuilt_ids holds the flights whose
        seat map was missing or did not match the layout and was rebuilt empty.
        """
        flights = []
        rebuilt_ids = set()
        for row in self.read_rows(self.data_dir / FLIGHTS_FILE):
            if len(row) < FLIGHT_FIELDS:
                logger.warning(f"Skipping malformed flight record: {row}")
                continue
            flight_id, airline, plane_id, capacity, available, destination, departure, arrival, status = row[:FLIGHT_FIELDS]
            try:
                capacity = int(capacity)
                flight = Flight(flight_id, airline, plane_id, capacity, destination,
                                departure, arrival, status)
            except (ValueError, ValidationError) as e:
                logger.warning(f"Skipping flight {flight_id}: {e}")
                continue

            grid = self._load_grid(flight_id, capacity)
            if grid is None:
                rebuilt_ids.add(flight_id)
            else:
                flight.grid = grid
                flight.available_seats = grid.available_count()

            if available.strip().isdigit() and int(available) != flight.available_seats:
                logger.warning(
                    f"Flight {flight_id} records {available} available seats, "
                    f"seat map has {flight.available_seats}; using the seat map"
                )
            flights.append(flight)

        logger.info(f"Loaded {len(flights)} flights from {self.data_dir}")
        return flights, rebuilt_ids

    def _load_grid(self, flight_id, capacity):
        try:
            persisted = self.read_rows(self.seatmap_path(flight_id))
        except FileOperationError as e:
            logger.warning(f"Unreadable seat map for flight {flight_id} ({e}); rebuilding from capacity")
            return None
        # Empty tokens come from the trailing comma some seat map files carry
        rows = [[token.strip() for token in row if token.strip()] for row in persisted]
        rows = [row for row in rows if row]
        if not rows:
            logger.warning(f"No seat map for flight {flight_id}; rebuilding from capacity")
            return None
        try:
            return SeatGrid.from_rows(capacity, rows)
        except ValidationError as e:
            logger.warning(f"Seat map of flight {flight_id} does not match its layout ({e}); rebuilding")
            return None

    def save_flights(self, flights):
        self.write_rows(self.data_dir / FLIGHTS_FILE, [flight.to_record() for flight in flights])
        for flight in flights:
            self.save_seat_map(flight)
        logger.debug(f"Saved {len(flights)} flights")

    def save_seat_map(self, flight):
        self.write_rows(self.seatmap_path(flight.flight_id), flight.grid.to_rows())

    def delete_flight_files(self, flight_id):
        self.delete_file(self.seatmap_path(flight_id))
        self.delete_file(self.waitinglist_path(flight_id))

    # --- Reservations ---

    def load_reservations(self):
        reservations = []
        for row in self.read_rows(self.data_dir / RESERVATIONS_FILE):
            if len(row) < RESERVATION_FIELDS:
                logger.warning(f"Skipping malformed reservation record: {row}")
                continue
            reservation_id, passenger, flight_id, airline, destination, seat, status, username = row[:RESERVATION_FIELDS]
            payment = row[RESERVATION_FIELDS] if len(row) > RESERVATION_FIELDS else ''
            reservations.append(Reservation(
                reservation_id=reservation_id,
                passenger_name=passenger,
                flight_id=flight_id,
                airline_name=airline,
                destination=destination,
                seat_number=seat,
                username=username,
                status=status,
                payment_method=payment,
            ))
        return reservations

    def save_reservations(self, reservations):
        self.write_rows(self.data_dir / RESERVATIONS_FILE, [r.to_record() for r in reservations])

    # --- Waiting lists ---

    def load_waiting_list(self, flight_id):
        waiting_list = WaitingList(flight_id)
        for row in self.read_rows(self.waitinglist_path(flight_id)):
            username = row[0]
            passenger_name = ','.join(row[1:])
            waiting_list.add_passenger(username, passenger_name)
        return waiting_list

    def save_waiting_list(self, waiting_list):
        # An empty list removes the file
        self.write_rows(
            self.waitinglist_path(waiting_list.flight_id),
            [[username, name] for username, name in waiting_list.passengers],
        )

    # --- Users ---

    def load_users(self):
        users = []
        for row in self.read_rows(self.data_dir / USERS_FILE):
            if len(row) < USER_FIELDS:
                logger.warning("Skipping malformed user record")
                continue
            username, password, name, role = row[:USER_FIELDS]
            role = Role.ADMIN if role == Role.ADMIN.value else Role.CUSTOMER
            users.append(User(username, password, name, role))
        return users

    def save_users(self, users):
        self.write_rows(self.data_dir / USERS_FILE, [user.to_record() for user in users])
