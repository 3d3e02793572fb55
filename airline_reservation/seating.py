# Seat inventory for a single flight: cabin layout tiers, the occupancy grid
# and the mapping between seat labels (e.g. '14C') and grid coordinates.
import math
import re
import string
from collections import namedtuple

from airline_reservation.exceptions import BookingError, ValidationError

# Capacity thresholds between the three cabin layouts
MEDIUM_CABIN_MIN = 60
LARGE_CABIN_MIN = 150

# Grid cell values: True covers occupied seats, aisles and cells that are not part of the plane
OCCUPIED = True
AVAILABLE = False

_ROW_PATTERN = re.compile(r'[0-9]+')


class LayoutConfig(namedtuple('LayoutConfig', 'seats_per_row total_columns aisle_positions')):
    """Cabin layout derived from capacity.

    seats_per_row is the number of seats left of the first aisle,
    total_columns includes the aisle columns.
    """
    __slots__ = ()

    def is_aisle(self, col):
        return col in self.aisle_positions

    @property
    def seats_per_full_row(self):
        return self.total_columns - len(self.aisle_positions)

    def rows_for(self, capacity):
        return math.ceil(capacity / self.seats_per_full_row)


def compute_layout(capacity):
    """Pick the cabin layout for a capacity (2-2, 3-3 or 3-4-x)."""
    if capacity < MEDIUM_CABIN_MIN:
        return LayoutConfig(2, 5, (2,))  # 2 seats + aisle + 2 seats
    if capacity < LARGE_CABIN_MIN:
        return LayoutConfig(3, 7, (3,))  # 3 seats + aisle + 3 seats
    return LayoutConfig(3, 11, (3, 8))  # 3 seats + aisle + 4 seats + aisle + rest


def build_grid(capacity, layout):
    """Build a fresh grid holding exactly `capacity` available seats."""
    per_row = layout.seats_per_full_row
    remaining = capacity % per_row
    total_rows = layout.rows_for(capacity)

    grid = []
    for row_index in range(total_rows):
        partial = row_index == total_rows - 1 and remaining > 0
        seats_left = remaining if partial else per_row
        row = []
        for col in range(layout.total_columns):
            if layout.is_aisle(col):
                row.append(OCCUPIED)
            elif seats_left > 0:
                row.append(AVAILABLE)
                seats_left -= 1
            else:
                row.append(OCCUPIED)  # Not part of the plane
        grid.append(row)

    # Trim surplus seats from the back of the cabin
    excess = count_available(grid, layout) - capacity
    for row in reversed(grid):
        for col in reversed(range(len(row))):
            if excess <= 0:
                return grid
            if not layout.is_aisle(col) and not row[col]:
                row[col] = OCCUPIED
                excess -= 1
    return grid


def count_available(grid, layout):
    """Count free cells outside the aisles."""
    return sum(
        1
        for row in grid
        for col, cell in enumerate(row)
        if not layout.is_aisle(col) and not cell
    )


def decode_seat(label, layout):
    """Convert a seat label such as '14C' to (row, col) grid indices.

    No bounds check happens here, so '0A' decodes to row -1.
    """
    label = str(label).strip()
    if len(label) < 2:
        raise ValidationError(f"Invalid seat number: '{label}'")

    row_part, letter = label[:-1], label[-1]
    if not _ROW_PATTERN.fullmatch(row_part):
        raise ValidationError(f"Invalid row in seat number: '{label}'")
    # Checked before upper() since some characters upper-case to two letters
    if letter not in string.ascii_letters:
        raise ValidationError(f"Invalid column in seat number: '{label}'")
    letter = letter.upper()

    row = int(row_part) - 1
    col = ord(letter) - ord('A')
    # Letters skip over aisles, so shift past every aisle at or before the column
    for aisle in layout.aisle_positions:
        if col >= aisle:
            col += 1
    return row, col


def encode_seat(row, col, layout):
    """Convert (row, col) grid indices to a seat label such as '14C'."""
    if layout.is_aisle(col):
        raise ValidationError(f"Column {col} is an aisle")
    adjusted = col - sum(1 for aisle in layout.aisle_positions if aisle < col)
    return f"{row + 1}{chr(ord('A') + adjusted)}"


class SeatGrid:
    """Occupancy grid of one flight.

    Every cell is a boolean, True when the seat is taken or the cell is not a
    bookable seat (aisle or unused space in the last row).
    """

    def __init__(self, capacity, layout=None, cells=None):
        self.capacity = capacity
        self.layout = layout or compute_layout(capacity)
        fresh = build_grid(capacity, self.layout)
        # Cells that are real seats, fixed for the lifetime of the grid
        self._seats = frozenset(
            (r, c)
            for r, row in enumerate(fresh)
            for c, cell in enumerate(row)
            if not self.layout.is_aisle(c) and not cell
        )
        self.cells = fresh if cells is None else cells

    @classmethod
    def from_rows(cls, capacity, rows):
        """Rehydrate a grid from persisted rows of '1'/'0' flags.

        The layout is derived from capacity and the persisted shape is checked
        against it. Aisles and unused cells are forced back to unavailable.
        """
        layout = compute_layout(capacity)
        expected_rows = layout.rows_for(capacity)
        if len(rows) != expected_rows:
            raise ValidationError(
                f"Seat map has {len(rows)} rows, expected {expected_rows} for capacity {capacity}"
            )
        for index, row in enumerate(rows):
            if len(row) != layout.total_columns:
                raise ValidationError(
                    f"Seat map row {index + 1} has {len(row)} columns, expected {layout.total_columns}"
                )
            bad = [flag for flag in row if flag not in ('0', '1')]
            if bad:
                raise ValidationError(f"Seat map row {index + 1} holds invalid flag '{bad[0]}'")

        grid = cls(capacity, layout)
        grid.cells = [
            [
                flag == '1' if grid.is_seat(r, c) else OCCUPIED
                for c, flag in enumerate(row)
            ]
            for r, row in enumerate(rows)
        ]
        return grid

    def to_rows(self):
        """Rows of '1'/'0' flags in the persisted seat map format."""
        return [['1' if cell else '0' for cell in row] for row in self.cells]

    @property
    def row_count(self):
        return len(self.cells)

    @property
    def column_count(self):
        return self.layout.total_columns

    def available_count(self):
        return count_available(self.cells, self.layout)

    def is_seat(self, row, col):
        """True for cells that are real, bookable seats."""
        return (row, col) in self._seats

    def check_cell(self, row, col):
        """Reject coordinates outside the grid or on an aisle."""
        if not (0 <= row < self.row_count and 0 <= col < self.column_count):
            raise ValidationError(f"Seat at row {row + 1}, column {col + 1} is out of range")
        if self.layout.is_aisle(col):
            raise ValidationError("Cannot book an aisle")

    def is_available(self, row, col):
        self.check_cell(row, col)
        return not self.cells[row][col]

    def occupy(self, row, col):
        if not self.is_available(row, col):
            raise BookingError(f"Seat {self.encode(row, col)} is not available")
        self.cells[row][col] = OCCUPIED

    def release(self, row, col):
        self.check_cell(row, col)
        if not self.is_seat(row, col):
            raise BookingError(f"Seat {self.encode(row, col)} is not part of the plane")
        if not self.cells[row][col]:
            raise BookingError(f"Seat {self.encode(row, col)} is already available")
        self.cells[row][col] = AVAILABLE

    def first_available(self):
        """(row, col) of the first free seat scanning front to back, or None."""
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                if not self.layout.is_aisle(c) and not cell:
                    return r, c
        return None

    def decode(self, label):
        return decode_seat(label, self.layout)

    def encode(self, row, col):
        return encode_seat(row, col, self.layout)
