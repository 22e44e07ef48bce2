# tests/test_exc.py
import pytest

from discord_ipc.exc import CloseCode, CommandError, ConnectionFailed, ReadError, RPCErrorCode


@pytest.mark.parametrize("code, close, expected", [
    (4000, False, RPCErrorCode.INVALID_PAYLOAD),
    (4006, False, RPCErrorCode.INVALID_PERMISSIONS),
    (5000, False, RPCErrorCode.OAUTH2_ERROR),
    (4000, True, CloseCode.INVALID_CLIENT_ID),
    (4004, True, CloseCode.INVALID_VERSION),
])
def test_command_error_code_namespaces(code, close, expected):
    error = CommandError(code, "message", close=close)

    assert error.code == code
    assert error.error_code is expected
    assert expected.name in str(error)


def test_command_error_unknown_code_warns():
    with pytest.warns(UserWarning):
        error = CommandError(1234, "Mystery")

    assert error.error_code is RPCErrorCode.UNKNOWN
    assert str(error) == "1234: Mystery"


def test_io_errors_keep_os_error():
    os_error = ConnectionResetError(104, "Connection reset by peer")
    error = ReadError(os_error)

    assert error.error is os_error
    assert "read from" in str(error)


def test_connection_failed_message():
    error = ConnectionFailed("/tmp/discord-ipc-0", ConnectionRefusedError(111, "refused"))
    assert "/tmp/discord-ipc-0" in str(error)
