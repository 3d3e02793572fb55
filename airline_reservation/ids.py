"""Sequential record IDs such as FL10001 and RES10001."""

FLIGHT_PREFIX = 'FL'
RESERVATION_PREFIX = 'RES'
ID_FLOOR = 10000


class IdGenerator:
    """Per-prefix counters seeded from IDs already on disk.

    Assumes a single process writes the data directory.
    """

    def __init__(self):
        self._counters = {}

    def seed(self, prefix, existing_ids):
        """Start the prefix after the highest numeric ID in existing_ids."""
        highest = ID_FLOOR
        for record_id in existing_ids:
            if not record_id.startswith(prefix):
                continue
            number = record_id[len(prefix):]
            if number.isdigit():
                highest = max(highest, int(number))
        self._counters[prefix] = highest

    def next_id(self, prefix):
        self._counters[prefix] = self._counters.get(prefix, ID_FLOOR) + 1
        return f"{prefix}{self._counters[prefix]}"
