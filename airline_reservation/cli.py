# Text menus for the airline reservation system.
# Every handler takes the ReservationSystem (and the logged-in user) and talks
# to the terminal through print/input; errors are reported and the menu resumes.
from loguru import logger

from airline_reservation.config import get_settings
from airline_reservation.exceptions import BookingError, ReservationError, ValidationError
from airline_reservation.logger_config import configure_logging
from airline_reservation.models import Role
from airline_reservation.payments import CreditCardPayment, GCashPayment
from airline_reservation.services import ReservationSystem
from airline_reservation.storage import FlatFileStore

BACK = ('0', 'b', 'B')


def ask(prompt):
    return input(prompt).strip()


def confirm(prompt):
    return ask(f"{prompt} (y/n): ").lower() == 'y'


def ask_int(prompt):
    value = ask(prompt)
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"'{value}' is not a number") from None


def choose(items, prompt):
    """Pick an item by its 1-based number; None means go back."""
    index = ask_int(prompt)
    if index == 0:
        return None
    if not 1 <= index <= len(items):
        raise ValidationError("Invalid selection")
    return items[index - 1]


def print_flights(flights):
    print(f"{'No.':>5}{'Flight ID':>12}{'Airline':>20}{'Destination':>24}"
          f"{'Departure':>22}{'Arrival':>22}{'Seats':>8}{'Status':>12}")
    print('-' * 125)
    for number, flight in enumerate(flights, start=1):
        print(f"{number:>5}{flight.flight_id:>12}{flight.airline_name:>20}{flight.destination:>24}"
              f"{flight.departure_time:>22}{flight.arrival_time:>22}"
              f"{flight.available_seats:>8}{flight.status:>12}")


def print_reservations(reservations):
    print(f"{'No.':>5}{'Reservation':>14}{'Passenger':>20}{'Flight ID':>12}"
          f"{'Destination':>24}{'Seat':>7}{'Status':>12}")
    print('-' * 94)
    for number, r in enumerate(reservations, start=1):
        print(f"{number:>5}{r.reservation_id:>14}{r.passenger_name:>20}{r.flight_id:>12}"
              f"{r.destination:>24}{r.seat_number:>7}{r.status:>12}")


def pick_flight(system):
    flights = system.list_flights()
    if not flights:
        print("No flights available.")
        return None
    print_flights(flights)
    return choose(flights, "\nSelect flight number (0 to go back): ")


# --- Admin actions ---

def create_flight(system, user):
    print("\n===== CREATE FLIGHT =====")
    airline = ask("Enter airline name (or 0 to go back): ")
    if airline == '0':
        return
    plane_id = ask("Enter plane number/ID: ")
    capacity = ask_int("Enter airplane capacity: ")
    destination = ask("Enter destination: ")
    departure = ask("Enter departure time: ")
    arrival = ask("Enter arrival time: ")
    if not confirm("Create this flight?"):
        print("Flight creation cancelled.")
        return
    flight = system.create_flight(airline, plane_id, capacity, destination, departure, arrival)
    print(f"Flight {flight.flight_id} created with {flight.capacity} seats.")


def delete_flight(system, user):
    print("\n===== DELETE FLIGHT =====")
    airline = ask("Enter airline name (or 0 to go back): ")
    if airline == '0':
        return
    flights = system.flights_for_airline(airline)
    if not flights:
        raise ValidationError(f"No flights found for airline: {airline}")
    print_flights(flights)
    flight_id = ask("\nEnter flight ID to delete: ")
    flight = system.get_flight(flight_id)
    if confirm(f"Delete flight {flight.flight_id} and all its reservations?"):
        system.delete_flight(flight_id)
        print("Flight deleted.")


def manage_reservations(system, user):
    print("\n===== RESERVATIONS =====")
    flight = pick_flight(system)
    if flight is None:
        return
    reservations = system.reservations_for_flight(flight.flight_id)
    if not reservations:
        print("No reservations for this flight.")
        return
    print_reservations(reservations)
    option = ask("\nDelete a reservation? (y/n, b to go back): ").lower()
    if option != 'y':
        return
    reservation_id = ask("Enter reservation ID: ")
    system.get_reservation(reservation_id)
    if confirm("Confirm deletion?"):
        system.cancel_reservation(reservation_id)
        print("Reservation deleted and seat released.")


def manage_flight_status(system, user):
    print("\n===== FLIGHT STATUS =====")
    flight = pick_flight(system)
    if flight is None:
        return
    print(f"\nFlight {flight.flight_id}: {flight.airline_name}, "
          f"{flight.departure_time} -> {flight.arrival_time}, status {flight.status}")
    if ask("Edit this flight? (y/n, b to go back): ").lower() != 'y':
        return
    print("Leave a field blank to keep its current value.")
    airline = ask(f"Airline [{flight.airline_name}]: ")
    departure = ask(f"Departure time [{flight.departure_time}]: ")
    arrival = ask(f"Arrival time [{flight.arrival_time}]: ")
    status = ask(f"Status [{flight.status}]: ")
    capacity = ask(f"Capacity [{flight.capacity}]: ")
    if capacity:
        if not capacity.isdigit():
            raise ValidationError(f"'{capacity}' is not a number")
        capacity = int(capacity)
    else:
        capacity = None
    if confirm("Save changes?"):
        system.update_flight(flight.flight_id, airline, departure, arrival, status, capacity)
        print("Flight updated.")


def view_seat_maps(system, user):
    print("\n===== SEAT MAPS =====")
    flight = pick_flight(system)
    if flight is not None:
        print()
        print(flight.seat_map())


def manage_waiting_list(system, user):
    print("\n===== WAITING LIST =====")
    flight = pick_flight(system)
    if flight is None:
        return
    waiting_list = system.waiting_list(flight.flight_id)
    print(f"\nWaiting List for Flight {flight.flight_id}:")
    print(f"{'No.':>5}{'Passenger Name':>20}{'Username':>20}")
    print('-' * 45)
    for number, (username, name) in enumerate(waiting_list.passengers, start=1):
        print(f"{number:>5}{name:>20}{username:>20}")
    if waiting_list.is_empty():
        print("No passengers in the waiting list.")
        return

    print("\n1. Promote next passenger")
    print("2. Remove a passenger")
    print("3. Back")
    choice = ask("Enter your choice: ")
    if choice == '1':
        if flight.is_fully_booked():
            raise BookingError("Flight is fully booked. Cannot promote passenger.")
        print()
        print(flight.seat_map())
        suggestion = flight.first_available_seat()
        seat = ask(f"Enter seat number [{suggestion}]: ") or suggestion
        if confirm(f"Promote {waiting_list.next_passenger()[1]} to seat {seat}?"):
            reservation = system.promote_from_waiting_list(flight.flight_id, seat)
            print(f"Passenger promoted. Reservation {reservation.reservation_id}, seat {reservation.seat_number}.")
    elif choice == '2':
        username = ask("Enter username to remove: ")
        if confirm(f"Remove {username} from the waiting list?"):
            system.remove_from_waiting_list(flight.flight_id, username)
            print("Passenger removed.")
    elif choice != '3':
        raise ValidationError("Invalid choice")


def manage_user_accounts(system, user):
    print("\n===== USER ACCOUNTS =====")
    customers = system.list_customers()
    if not customers:
        print("No customer accounts.")
        return
    print(f"{'Username':>20}{'Name':>30}")
    print('-' * 50)
    for customer in customers:
        print(f"{customer.username:>20}{customer.name:>30}")
    if ask("\nDelete a customer account? (y/n): ").lower() != 'y':
        return
    username = ask("Enter username: ")
    if confirm(f"Delete {username}, their reservations and waiting list entries?"):
        system.delete_customer(username)
        print("Customer account deleted.")


# --- Customer actions ---

def choose_payment():
    print("\nPayment method:")
    print("1. GCash")
    print("2. Credit Card")
    print("0. Back")
    choice = ask("Enter your choice: ")
    if choice == '0':
        return None
    if choice == '1':
        return GCashPayment(ask("Enter GCash number: "))
    if choice == '2':
        return CreditCardPayment(
            ask("Enter card number: "),
            ask("Enter expiry date (MM/YY): "),
            ask("Enter CVV: "),
        )
    raise ValidationError("Invalid payment method")


def book_flight(system, user):
    destination = ask("\nEnter destination (b to go back): ")
    if destination in BACK:
        return
    flights = system.search_flights(destination)
    if not flights:
        raise ValidationError(f"No flights found for destination: {destination}")
    print_flights(flights)
    flight = choose(flights, "\nSelect flight number (0 to go back): ")
    if flight is None:
        return

    if flight.is_fully_booked():
        if confirm("This flight is fully booked. Join the waiting list?"):
            waiting_list = system.join_waiting_list(user, flight.flight_id)
            print(f"Added to the waiting list at position {len(waiting_list)}.")
        return

    print()
    print(flight.seat_map())
    seat = ask("\nEnter seat number (e.g. 1A, b to go back): ")
    if seat in BACK:
        return
    if not flight.is_seat_available(seat):
        raise ValidationError(f"Seat {seat.upper()} is not available. Please choose another seat.")

    payment = choose_payment()
    if payment is None:
        return
    print(f"\nTotal: ${system.ticket_price:.2f} ({payment.payment_details()})")
    if not confirm("Confirm payment?"):
        print("Booking cancelled.")
        return
    reservation = system.book_seat(user, flight.flight_id, seat, payment)
    print(f"Booking confirmed! Reservation {reservation.reservation_id}, seat {reservation.seat_number}.")


def view_flights(system, user):
    print("\n===== AVAILABLE FLIGHTS =====")
    flights = system.list_flights()
    if not flights:
        print("No flights available.")
        return
    print_flights(flights)
    if confirm("\nBook a flight?"):
        book_flight(system, user)


def view_bookings(system, user):
    print("\n===== MY BOOKINGS =====")
    reservations = system.reservations_for_user(user.username)
    if not reservations:
        print("You have no bookings.")
        return
    print_reservations(reservations)


def cancel_booking(system, user):
    print("\n===== CANCEL BOOKING =====")
    reservations = system.reservations_for_user(user.username)
    if not reservations:
        print("You have no bookings to cancel.")
        return
    print_reservations(reservations)
    reservation = choose(reservations, "\nEnter booking number to cancel or 0 to go back: ")
    if reservation is None:
        return
    if confirm("Confirm cancellation?"):
        system.cancel_reservation(reservation.reservation_id, username=user.username)
        print("Booking has been successfully cancelled.")
    else:
        print("Cancellation cancelled.")


ADMIN_MENU = [
    ("Create Flight", create_flight),
    ("Delete Flight", delete_flight),
    ("Reservations (View/Delete)", manage_reservations),
    ("Flight Status (View/Edit)", manage_flight_status),
    ("View Seat Maps", view_seat_maps),
    ("Manage Waiting List", manage_waiting_list),
    ("User Accounts", manage_user_accounts),
]

CUSTOMER_MENU = [
    ("View Flights", view_flights),
    ("View Bookings", view_bookings),
    ("Cancel Booking", cancel_booking),
]

MENUS = {
    Role.ADMIN: ("ADMIN MENU", ADMIN_MENU),
    Role.CUSTOMER: ("CUSTOMER MENU", CUSTOMER_MENU),
}


def run_action(action, *args):
    """Run one menu action, reporting reservation errors instead of exiting."""
    try:
        action(*args)
    except ReservationError as e:
        logger.debug(f"{action.__name__} failed: {e.message}")
        print(f"\nError: {e.message}")


def show_menu(title, entries):
    print(f"\n===== {title} =====")
    for number, (label, _) in enumerate(entries, start=1):
        print(f"{number}. {label}")
    print(f"{len(entries) + 1}. Logout")


def user_menu(system, user):
    """Loop over the menu of the user's role until logout."""
    title, entries = MENUS[user.role]
    while True:
        show_menu(title, entries)
        choice = ask("Enter your choice: ")
        if choice == str(len(entries) + 1):
            print("\nLogging out...")
            break
        if choice.isdigit() and 1 <= int(choice) <= len(entries):
            run_action(entries[int(choice) - 1][1], system, user)
        else:
            print("\nInvalid choice. Please try again.")


def ask_role(action):
    print(f"\n{action} as:")
    print("1. Admin")
    print("2. Customer")
    print("3. Back to Main Menu")
    choice = ask("Enter your choice: ")
    if choice == '3':
        return None
    if choice not in ('1', '2'):
        raise ValidationError("Invalid choice")
    return Role.ADMIN if choice == '1' else Role.CUSTOMER


def sign_up(system):
    print("\n===== SIGN UP =====")
    role = ask_role("Sign up")
    if role is None:
        return
    username = ask("\nEnter username: ")
    password = ask("Enter password: ")
    confirm_password = ask("Confirm password: ")
    name = ask("Enter your full name: ")
    system.sign_up(username, password, confirm_password, name, role)
    print("\nSign up successful! You can now log in.")


def log_in(system):
    print("\n===== LOG IN =====")
    role = ask_role("Log in")
    if role is None:
        return
    username = ask("\nEnter username: ")
    password = ask("Enter password: ")
    user = system.log_in(username, password, role)
    print(f"\nLogin successful! Welcome, {user.name}!")
    user_menu(system, user)


def show_main_menu(title):
    print(f"\n===== {title.upper()} =====")
    print("1. Sign Up")
    print("2. Log In")
    print("3. Exit")


def run(system, title):
    while True:
        show_main_menu(title)
        choice = ask("Enter your choice: ")
        if choice == '1':
            run_action(sign_up, system)
        elif choice == '2':
            run_action(log_in, system)
        elif choice == '3':
            print(f"\nThank you for using the {title}. Goodbye!")
            break
        else:
            print("\nInvalid choice. Please try again.")


def main():
    settings = get_settings()
    configure_logging(settings)

    system = ReservationSystem(FlatFileStore(settings.DATA_DIR), ticket_price=settings.TICKET_PRICE)
    system.load()
    try:
        run(system, settings.APP_NAME)
    except (KeyboardInterrupt, EOFError):
        print("\nGoodbye!")
    finally:
        system.save()


if __name__ == "__main__":
    main()
