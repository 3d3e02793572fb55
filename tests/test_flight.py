"""Unit tests for Flight booking operations and seat map rendering"""

import pytest

from airline_reservation.exceptions import BookingError, ValidationError
from airline_reservation.models import Flight, WaitingList


def make_flight(capacity):
    return Flight('FL10001', 'Philippine Airlines', 'RP-C7772', capacity, 'Manila',
                  '09:00 AM', '11:00 AM')


@pytest.mark.unit
class TestFlightCreation:

    def test_new_flight_defaults(self):
        flight = make_flight(60)
        assert flight.available_seats == 60
        assert flight.status == 'On Time'
        assert flight.layout.total_columns == 7

    @pytest.mark.parametrize('capacity', [0, -5, '60', 12.5, True])
    def test_rejects_invalid_capacity(self, capacity):
        with pytest.raises(ValidationError):
            make_flight(capacity)

    def test_to_record_order(self):
        flight = make_flight(5)
        flight.book_seat('1A')
        assert flight.to_record() == [
            'FL10001', 'Philippine Airlines', 'RP-C7772', '5', '4',
            'Manila', '09:00 AM', '11:00 AM', 'On Time',
        ]


@pytest.mark.unit
class TestBookingLifecycle:

    def test_book_and_cancel(self):
        flight = make_flight(60)
        assert flight.is_seat_available('1A') is True

        flight.book_seat('1A')
        assert flight.available_seats == 59
        assert flight.is_seat_available('1A') is False

        with pytest.raises(BookingError):
            flight.book_seat('1A')
        assert flight.available_seats == 59

        flight.cancel_seat('1A')
        assert flight.available_seats == 60

        with pytest.raises(BookingError):
            flight.cancel_seat('1A')
        assert flight.available_seats == 60

    def test_lowercase_label(self):
        flight = make_flight(60)
        flight.book_seat('3c')
        assert flight.is_seat_available('3C') is False

    @pytest.mark.parametrize('label', ['0A', '999Z', '11A', '1H'])
    def test_out_of_range_labels(self, label):
        flight = make_flight(60)
        with pytest.raises(ValidationError, match='out of range'):
            flight.is_seat_available(label)
        with pytest.raises(ValidationError, match='out of range'):
            flight.book_seat(label)
        with pytest.raises(ValidationError, match='out of range'):
            flight.cancel_seat(label)
        assert flight.available_seats == 60

    def test_malformed_label_leaves_state_untouched(self):
        flight = make_flight(60)
        with pytest.raises(ValidationError):
            flight.book_seat('A1')
        assert flight.available_seats == 60
        assert flight.grid.available_count() == 60

    def test_unused_cell_in_last_row_is_not_bookable(self):
        flight = make_flight(25)
        # row 7 only has seat A
        assert flight.is_seat_available('7B') is False
        with pytest.raises(BookingError):
            flight.book_seat('7B')
        with pytest.raises(BookingError):
            flight.cancel_seat('7B')
        assert flight.available_seats == 25


@pytest.mark.unit
class TestFullFlight:

    @pytest.mark.parametrize('capacity', [5, 61, 151])
    def test_booking_every_seat(self, capacity):
        flight = make_flight(capacity)
        booked = []
        while not flight.is_fully_booked():
            seat = flight.first_available_seat()
            flight.book_seat(seat)
            booked.append(seat)

        assert len(booked) == capacity
        assert len(set(booked)) == capacity
        assert flight.available_seats == 0
        assert flight.grid.available_count() == 0
        assert flight.first_available_seat() is None

        flight.cancel_seat(booked[capacity // 2])
        assert flight.is_fully_booked() is False
        assert flight.first_available_seat() == booked[capacity // 2]

    def test_first_available_seat_order(self):
        flight = make_flight(20)
        assert flight.first_available_seat() == '1A'
        flight.book_seat('1A')
        flight.book_seat('1B')
        assert flight.first_available_seat() == '1C'


@pytest.mark.unit
class TestChangeCapacity:

    def test_relayout_empty_flight(self):
        flight = make_flight(20)
        flight.change_capacity(200)
        assert flight.capacity == 200
        assert flight.available_seats == 200
        assert flight.layout.total_columns == 11

    def test_rejected_with_bookings(self):
        flight = make_flight(20)
        flight.book_seat('1A')
        with pytest.raises(BookingError):
            flight.change_capacity(30)
        assert flight.capacity == 20

    def test_rejects_invalid_capacity(self):
        flight = make_flight(20)
        with pytest.raises(ValidationError):
            flight.change_capacity(0)


@pytest.mark.unit
class TestSeatMap:

    def test_render(self):
        flight = make_flight(5)
        flight.book_seat('1A')
        lines = flight.seat_map().splitlines()

        assert lines[0] == 'Seat Map for Flight FL10001 (Philippine Airlines):'
        assert lines[2] == 'Available Seats: 4 out of 5'
        assert lines[4] == '    A   B       C   D'
        assert lines[5] == ' 1  X   O   |   O   O'
        assert lines[6] == ' 2  O   X   |   X   X'
        assert lines[-1] == 'Legend: O - Available, X - Occupied, | - Aisle'

    def test_large_cabin_header(self):
        flight = make_flight(150)
        header = flight.seat_map().splitlines()[4]
        assert header.split() == list('ABCDEFGHI')


@pytest.mark.unit
class TestWaitingList:

    def test_fifo(self):
        waiting_list = WaitingList('FL10001')
        waiting_list.add_passenger('maria', 'Maria Clara')
        waiting_list.add_passenger('jose', 'Jose Rizal')
        assert waiting_list.next_passenger() == ('maria', 'Maria Clara')
        assert 'jose' in waiting_list
        assert len(waiting_list) == 2

        assert waiting_list.remove_passenger('maria') is True
        assert waiting_list.next_passenger() == ('jose', 'Jose Rizal')
        assert waiting_list.remove_passenger('maria') is False

    def test_empty(self):
        waiting_list = WaitingList('FL10001')
        assert waiting_list.is_empty()
        assert waiting_list.next_passenger() is None
