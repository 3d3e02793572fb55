"""
Reservation system context: flights, reservations, waiting lists and accounts.

One instance is built at start-up around a FlatFileStore and handed to the
console. Every mutating operation persists the records it touched.
"""
from loguru import logger

from airline_reservation.exceptions import BookingError, ValidationError
from airline_reservation.ids import FLIGHT_PREFIX, RESERVATION_PREFIX, IdGenerator
from airline_reservation.models import Flight, Reservation, Role, User, WaitingList


def _required(value, label):
    value = (value or '').strip()
    if not value:
        raise ValidationError(f"{label} cannot be empty")
    if ',' in value:
        # Commas are field separators in the data files
        raise ValidationError(f"{label} cannot contain commas")
    return value


class ReservationSystem:

    def __init__(self, store, ticket_price=500.00):
        self.store = store
        self.ticket_price = ticket_price
        self.ids = IdGenerator()
        self.flights = {}
        self.reservations = []
        self.waiting_lists = {}
        self.users = {}

    # --- Persistence ---

    def load(self):
        """Read every record from the store and seed the ID counters."""
        self.store.initialize()
        flights, rebuilt_ids = self.store.load_flights()
        self.flights = {flight.flight_id: flight for flight in flights}
        self.reservations = self.store.load_reservations()
        self.users = {user.username: user for user in self.store.load_users()}
        self.waiting_lists = {
            flight_id: self.store.load_waiting_list(flight_id) for flight_id in self.flights
        }

        for flight_id in rebuilt_ids:
            flight = self.flights.get(flight_id)
            if flight is not None:
                self._rebook_reservations(flight)

        self.ids.seed(FLIGHT_PREFIX, list(self.flights))
        self.ids.seed(RESERVATION_PREFIX, [r.reservation_id for r in self.reservations])
        logger.info(
            f"Loaded {len(self.flights)} flights, {len(self.reservations)} reservations, "
            f"{len(self.users)} users"
        )

    def _rebook_reservations(self, flight):
        # The flight got a fresh grid; occupy the seats its reservations hold
        for reservation in self.reservations_for_flight(flight.flight_id):
            try:
                flight.book_seat(reservation.seat_number)
            except (ValidationError, BookingError) as e:
                logger.warning(
                    f"Reservation {reservation.reservation_id} seat {reservation.seat_number} "
                    f"could not be restored on flight {flight.flight_id}: {e}"
                )
        self.store.save_seat_map(flight)

    def save(self):
        self.store.save_flights(list(self.flights.values()))
        self.store.save_reservations(self.reservations)
        self.store.save_users(list(self.users.values()))
        for waiting_list in self.waiting_lists.values():
            self.store.save_waiting_list(waiting_list)

    def _save_flights(self):
        self.store.save_flights(list(self.flights.values()))

    # --- Flights ---

    def create_flight(self, airline_name, plane_id, capacity, destination, departure_time, arrival_time):
        airline_name = _required(airline_name, 'Airline name')
        plane_id = _required(plane_id, 'Plane ID')
        destination = _required(destination, 'Destination')
        departure_time = _required(departure_time, 'Departure time')
        arrival_time = _required(arrival_time, 'Arrival time')

        flight = Flight(self.ids.next_id(FLIGHT_PREFIX), airline_name, plane_id, capacity,
                        destination, departure_time, arrival_time)
        self.flights[flight.flight_id] = flight
        self.waiting_lists[flight.flight_id] = WaitingList(flight.flight_id)
        self._save_flights()
        logger.info(f"Created flight {flight.flight_id} ({airline_name} to {destination}, {capacity} seats)")
        return flight

    def get_flight(self, flight_id):
        try:
            return self.flights[flight_id]
        except KeyError:
            raise ValidationError(f"Flight not found: {flight_id}") from None

    def list_flights(self):
        return list(self.flights.values())

    def flights_for_airline(self, airline_name):
        return [f for f in self.flights.values() if f.airline_name == airline_name]

    def search_flights(self, destination):
        """Flights whose destination contains the given text (case-insensitive)."""
        needle = destination.strip().lower()
        return [f for f in self.flights.values() if needle in f.destination.lower()]

    def update_flight(self, flight_id, airline_name=None, departure_time=None,
                      arrival_time=None, status=None, capacity=None):
        """Edit flight details; blank values keep the current ones.

        A new capacity re-lays out the cabin and is refused once seats are booked.
        """
        flight = self.get_flight(flight_id)
        if capacity is not None and capacity != flight.capacity:
            flight.change_capacity(capacity)
        changes = {
            'airline_name': airline_name,
            'departure_time': departure_time,
            'arrival_time': arrival_time,
            'status': status,
        }
        for attr, value in changes.items():
            if value and value.strip():
                setattr(flight, attr, _required(value, attr.replace('_', ' ').capitalize()))
        self._save_flights()
        logger.info(f"Updated flight {flight_id}: status {flight.status}")
        return flight

    def delete_flight(self, flight_id):
        """Remove a flight with its reservations, waiting list and data files."""
        flight = self.get_flight(flight_id)
        self.reservations = [r for r in self.reservations if r.flight_id != flight_id]
        self.waiting_lists.pop(flight_id, None)
        del self.flights[flight_id]

        self.store.delete_flight_files(flight_id)
        self._save_flights()
        self.store.save_reservations(self.reservations)
        logger.info(f"Deleted flight {flight_id} ({flight.airline_name})")

    # --- Reservations ---

    def book_seat(self, user, flight_id, seat_number, payment):
        """Charge the payment and reserve a seat for the user."""
        flight = self.get_flight(flight_id)
        if flight.is_fully_booked():
            raise BookingError(f"Flight {flight_id} is fully booked")
        seat_number = seat_number.strip().upper()
        if not flight.is_seat_available(seat_number):
            raise BookingError(f"Seat {seat_number} is not available. Please choose another seat.")

        if not payment.process_payment(self.ticket_price):
            raise BookingError("Payment was declined")

        flight.book_seat(seat_number)
        reservation = Reservation(
            reservation_id=self.ids.next_id(RESERVATION_PREFIX),
            passenger_name=user.name,
            flight_id=flight_id,
            airline_name=flight.airline_name,
            destination=flight.destination,
            seat_number=seat_number,
            username=user.username,
            payment_method=payment.payment_details(),
        )
        self.reservations.append(reservation)
        self._save_flights()
        self.store.save_reservations(self.reservations)
        logger.info(f"Booked seat {seat_number} on {flight_id} for {user.username} ({reservation.reservation_id})")
        return reservation

    def get_reservation(self, reservation_id):
        for reservation in self.reservations:
            if reservation.reservation_id == reservation_id:
                return reservation
        raise ValidationError(f"Reservation not found: {reservation_id}")

    def reservations_for_user(self, username):
        return [r for r in self.reservations if r.username == username]

    def reservations_for_flight(self, flight_id):
        return [r for r in self.reservations if r.flight_id == flight_id]

    def cancel_reservation(self, reservation_id, username=None):
        """Free the reserved seat and drop the reservation.

        When `username` is given the reservation must belong to that user.
        """
        reservation = self.get_reservation(reservation_id)
        if username is not None and reservation.username != username:
            raise ValidationError(f"Reservation not found: {reservation_id}")

        flight = self.flights.get(reservation.flight_id)
        if flight is not None:
            flight.cancel_seat(reservation.seat_number)
        self.reservations.remove(reservation)

        self._save_flights()
        self.store.save_reservations(self.reservations)
        logger.info(f"Cancelled reservation {reservation_id} (seat {reservation.seat_number})")
        return reservation

    # --- Waiting lists ---

    def waiting_list(self, flight_id):
        self.get_flight(flight_id)
        return self.waiting_lists.setdefault(flight_id, WaitingList(flight_id))

    def join_waiting_list(self, user, flight_id):
        flight = self.get_flight(flight_id)
        if not flight.is_fully_booked():
            raise BookingError(f"Flight {flight_id} still has available seats")
        waiting_list = self.waiting_list(flight_id)
        if user.username in waiting_list:
            raise BookingError(f"{user.username} is already on the waiting list for {flight_id}")

        waiting_list.add_passenger(user.username, user.name)
        self.store.save_waiting_list(waiting_list)
        logger.info(f"{user.username} joined the waiting list for {flight_id} (position {len(waiting_list)})")
        return waiting_list

    def promote_from_waiting_list(self, flight_id, seat_number=None):
        """Give the first waiting passenger a seat, by default the first free one."""
        flight = self.get_flight(flight_id)
        if flight.is_fully_booked():
            raise BookingError("Flight is fully booked. Cannot promote passenger.")
        waiting_list = self.waiting_list(flight_id)
        entry = waiting_list.next_passenger()
        if entry is None:
            raise ValidationError("No passengers in the waiting list")
        username, passenger_name = entry

        seat_number = (seat_number or flight.first_available_seat()).strip().upper()
        flight.book_seat(seat_number)
        reservation = Reservation(
            reservation_id=self.ids.next_id(RESERVATION_PREFIX),
            passenger_name=passenger_name,
            flight_id=flight_id,
            airline_name=flight.airline_name,
            destination=flight.destination,
            seat_number=seat_number,
            username=username,
        )
        self.reservations.append(reservation)
        waiting_list.remove_passenger(username)

        self._save_flights()
        self.store.save_reservations(self.reservations)
        self.store.save_waiting_list(waiting_list)
        logger.info(f"Promoted {username} from the waiting list of {flight_id} to seat {seat_number}")
        return reservation

    def remove_from_waiting_list(self, flight_id, username):
        waiting_list = self.waiting_list(flight_id)
        if not waiting_list.remove_passenger(username):
            raise ValidationError("Passenger not found in waiting list")
        self.store.save_waiting_list(waiting_list)
        logger.info(f"Removed {username} from the waiting list of {flight_id}")

    # --- Accounts ---

    def sign_up(self, username, password, confirm_password, name, role=Role.CUSTOMER):
        username = _required(username, 'Username')
        if username in self.users:
            raise ValidationError("Username already exists. Please choose another one")
        if not password:
            raise ValidationError("Password cannot be empty")
        if ',' in password:
            raise ValidationError("Password cannot contain commas")
        if password != confirm_password:
            raise ValidationError("Passwords do not match")
        name = _required(name, 'Name')

        user = User(username, password, name, Role(role))
        self.users[username] = user
        self.store.save_users(list(self.users.values()))
        logger.info(f"Signed up {user.role.value} account {username}")
        return user

    def log_in(self, username, password, role=None):
        """Return the matching account; `role` restricts the account type."""
        user = self.users.get(username)
        if user is None or user.password != password:
            raise ValidationError("Invalid username or password")
        if role is not None and user.role is not Role(role):
            raise ValidationError("Invalid user type for this account")
        logger.info(f"{username} logged in")
        return user

    def list_customers(self):
        return [u for u in self.users.values() if u.role is Role.CUSTOMER]

    def delete_customer(self, username):
        """Delete a customer account, freeing its seats and waiting list places."""
        user = self.users.get(username)
        if user is None or user.is_admin:
            raise ValidationError("Customer account not found")

        for reservation in self.reservations_for_user(username):
            flight = self.flights.get(reservation.flight_id)
            if flight is None:
                continue
            try:
                flight.cancel_seat(reservation.seat_number)
            except BookingError as e:
                logger.warning(f"Seat {reservation.seat_number} of {reservation.reservation_id} was not booked: {e}")
        self.reservations = [r for r in self.reservations if r.username != username]
        for waiting_list in self.waiting_lists.values():
            while waiting_list.remove_passenger(username):
                pass
        del self.users[username]

        self.save()
        logger.info(f"Deleted customer account {username}")
