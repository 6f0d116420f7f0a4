"""Feed-weights domain exceptions (raised by engine/store, caught by service or controller)."""


class InvalidDistribution(Exception):
    """Weights are missing a category, carry an unknown one, or hold a non-integer/negative value."""


class PersistenceReadCorrupt(Exception):
    """Stored payload could not be decoded into a weights record."""


class PersistenceWriteFailed(Exception):
    def __init__(self, key: str) -> None:
        super().__init__(f"Could not persist feed weights under {key}.")
        self.key = key
