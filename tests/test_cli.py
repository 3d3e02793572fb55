"""
Console menu tests driven by scripted input

Test Focus:
1. Sign up, log in and logout through the main menu
2. Customer booking, cancellation and waiting list flows
3. Admin flight creation and waiting list promotion
4. Errors are reported and the menu keeps running
"""

import pytest

from airline_reservation.cli import run

TITLE = 'Airline Reservation System'


@pytest.fixture
def answer(monkeypatch):
    """Feed a fixed list of answers to input()"""
    def _answer(*answers):
        replies = iter(answers)
        monkeypatch.setattr('builtins.input', lambda prompt='': next(replies))
    return _answer


@pytest.mark.integration
class TestMainMenu:

    def test_exit(self, system, answer, capsys):
        answer('3')
        run(system, TITLE)
        assert 'Goodbye!' in capsys.readouterr().out

    def test_invalid_choice(self, system, answer, capsys):
        answer('9', '3')
        run(system, TITLE)
        assert 'Invalid choice' in capsys.readouterr().out

    def test_bad_login_reports_error(self, system, customer, answer, capsys):
        answer('2', '2', 'juan', 'wrong', '3')
        run(system, TITLE)
        assert 'Error: Invalid username or password' in capsys.readouterr().out

    def test_wrong_account_type(self, system, customer, answer, capsys):
        answer('2', '1', 'juan', 'pass123', '3')
        run(system, TITLE)
        assert 'Error: Invalid user type for this account' in capsys.readouterr().out

    def test_mismatched_passwords(self, system, answer, capsys):
        answer('1', '2', 'alice', 'pw', 'pq', 'Alice Smith', '3')
        run(system, TITLE)
        assert 'Error: Passwords do not match' in capsys.readouterr().out
        assert 'alice' not in system.users


@pytest.mark.integration
class TestCustomerFlows:

    def test_sign_up_and_book(self, system, answer, capsys):
        flight = system.create_flight('PAL', 'RP-C7772', 60, 'Manila', '09:00 AM', '11:00 AM')
        answer(
            '1', '2', 'alice', 'pw', 'pw', 'Alice Smith',
            '2', '2', 'alice', 'pw',
            '1', 'y', 'Manila', '1', '1A', '1', '09171234567', 'y',
            '4', '3',
        )
        run(system, TITLE)

        out = capsys.readouterr().out
        assert 'Welcome, Alice Smith!' in out
        assert 'Booking confirmed! Reservation RES10001, seat 1A.' in out
        assert flight.is_seat_available('1A') is False
        assert system.reservations_for_user('alice')[0].payment_method == 'GCash: 09171234567'

    def test_taken_seat_reported(self, system, customer, flight, payment, answer, capsys):
        system.book_seat(customer, flight.flight_id, '1A', payment)
        answer('2', '2', 'juan', 'pass123', '1', 'y', 'Tokyo', '1', '1A', '4', '3')
        run(system, TITLE)
        assert 'Error: Seat 1A is not available' in capsys.readouterr().out
        assert len(system.reservations) == 1

    def test_cancel_booking(self, system, customer, flight, payment, answer, capsys):
        system.book_seat(customer, flight.flight_id, '2C', payment)
        answer('2', '2', 'juan', 'pass123', '3', '1', 'y', '4', '3')
        run(system, TITLE)
        assert 'Booking has been successfully cancelled.' in capsys.readouterr().out
        assert system.reservations == []
        assert flight.available_seats == 60

    def test_join_waiting_list(self, system, customer, payment, answer, capsys):
        flight = system.create_flight('AirAsia', 'RP-C8972', 1, 'Cebu', '6:00 AM', '7:10 AM')
        system.book_seat(customer, flight.flight_id, '1A', payment)
        system.sign_up('maria', 'pw', 'pw', 'Maria Clara')
        answer('2', '2', 'maria', 'pw', '1', 'y', 'Cebu', '1', 'y', '4', '3')
        run(system, TITLE)
        assert 'Added to the waiting list at position 1.' in capsys.readouterr().out
        assert 'maria' in system.waiting_list(flight.flight_id)


@pytest.mark.integration
class TestAdminFlows:

    def test_create_flight(self, system, answer, capsys):
        answer(
            '1', '1', 'admin', 'pw', 'pw', 'Admin',
            '2', '1', 'admin', 'pw',
            '1', 'PAL', 'RP-C1', '60', 'Tokyo', '08:00', '12:00', 'y',
            '8', '3',
        )
        run(system, TITLE)
        assert 'Flight FL10001 created with 60 seats.' in capsys.readouterr().out
        assert system.get_flight('FL10001').destination == 'Tokyo'

    def test_non_numeric_capacity(self, system, admin, answer, capsys):
        answer('2', '1', 'admin', 'secret', '1', 'PAL', 'RP-C1', 'sixty', '8', '3')
        run(system, TITLE)
        assert "Error: 'sixty' is not a number" in capsys.readouterr().out
        assert system.list_flights() == []

    def test_promote_from_waiting_list(self, system, admin, customer, payment, answer, capsys):
        flight = system.create_flight('AirAsia', 'RP-C8972', 1, 'Cebu', '6:00 AM', '7:10 AM')
        reservation = system.book_seat(customer, flight.flight_id, '1A', payment)
        maria = system.sign_up('maria', 'pw', 'pw', 'Maria Clara')
        system.join_waiting_list(maria, flight.flight_id)
        system.cancel_reservation(reservation.reservation_id)

        answer('2', '1', 'admin', 'secret', '6', '1', '1', '', 'y', '8', '3')
        run(system, TITLE)

        assert 'Passenger promoted.' in capsys.readouterr().out
        assert system.reservations_for_user('maria')[0].seat_number == '1A'
        assert flight.is_fully_booked()

    def test_edit_flight_capacity(self, system, admin, flight, answer, capsys):
        answer('2', '1', 'admin', 'secret', '4', '1', 'y', '', '', '', 'Delayed', '30', 'y', '8', '3')
        run(system, TITLE)
        assert 'Flight updated.' in capsys.readouterr().out
        assert flight.capacity == 30
        assert flight.status == 'Delayed'
        assert flight.layout.total_columns == 5

    def test_edit_flight_bad_capacity(self, system, admin, flight, answer, capsys):
        answer('2', '1', 'admin', 'secret', '4', '1', 'y', '', '', '', '', 'many', '8', '3')
        run(system, TITLE)
        assert "Error: 'many' is not a number" in capsys.readouterr().out
        assert flight.capacity == 60

    def test_view_seat_map(self, system, admin, flight, answer, capsys):
        answer('2', '1', 'admin', 'secret', '5', '1', '8', '3')
        run(system, TITLE)
        assert 'Seat Map for Flight FL10001 (Cebu Pacific):' in capsys.readouterr().out
