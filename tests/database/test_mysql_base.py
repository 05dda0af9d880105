import pytest
from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError, OperationalError

from src.class_attendance.class_attendance.core.exceptions import AlreadyMarked, NetworkError
from src.class_attendance.class_attendance.database.mysql_base import store_errors


def test_duplicate_key_becomes_already_marked():
    with pytest.raises(AlreadyMarked):
        with store_errors("record attendance"):
            raise IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)


def test_other_integrity_error_is_network_error():
    with pytest.raises(NetworkError):
        with store_errors("record attendance"):
            raise IntegrityError(msg="FK fails", errno=errorcode.ER_NO_REFERENCED_ROW_2)


def test_connection_failure_is_network_error():
    with pytest.raises(NetworkError) as exc:
        with store_errors("load course"):
            raise OperationalError(msg="Lost connection", errno=2013)

    assert exc.value.message == "Failed to load course."
    assert isinstance(exc.value.cause, OperationalError)


def test_domain_errors_pass_through():
    with pytest.raises(AlreadyMarked):
        with store_errors("record attendance"):
            raise AlreadyMarked()
