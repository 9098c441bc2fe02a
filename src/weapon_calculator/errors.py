"""Exception types raised by the weapon calculator."""


class WeaponCalculatorError(Exception):
    """Base exception for the weapon calculator."""

    def __init__(self, message: str = "Unknown weapon calculator error"):
        self.message = message
        super().__init__(self.message)


class RegulationDataError(WeaponCalculatorError):
    """A weapon references a table entry the regulation dataset does not have.

    This means the dataset is corrupt or incompatible; the whole regulation
    version fails to load.
    """

    def __init__(self, table: str, entry_id: int, weapon_name: str):
        self.table = table
        self.entry_id = entry_id
        self.weapon_name = weapon_name
        super().__init__(f"No {table} entry found for id={entry_id} weapon={weapon_name}")


class CodecError(WeaponCalculatorError):
    """A compact weapon record could not be encoded or decoded."""


class UnknownRegulationVersionError(WeaponCalculatorError, KeyError):
    """The requested regulation version is not in the registry."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown regulation version: {key!r}")

    def __str__(self) -> str:
        return self.message
