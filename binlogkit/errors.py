"""Exception hierarchy for binlog decoding."""


class BinlogError(Exception):
    """Base class for all errors raised while reading or decoding a binlog."""

    prefix = "binlog error"

    def __init__(self, detail: object = "") -> None:
        self.detail = detail
        super().__init__(f"{self.prefix}: {detail}")


class UnsupportedColumnTypeError(BinlogError):
    """A column uses a type the decoder cannot handle."""

    prefix = "unsupported column type"


class UnexpectedDataError(BinlogError):
    """The binlog stream holds data that does not fit the expected format."""

    prefix = "unexpected binlog data"


class ConnectError(BinlogError):
    """Connecting to or talking with the server failed."""

    prefix = "connect error"


class ParseJsonError(BinlogError):
    """A binary JSON value could not be decoded."""

    prefix = "parse json error"


class InvalidGtidError(BinlogError):
    """A GTID or GTID set is malformed."""

    prefix = "invalid gtid"