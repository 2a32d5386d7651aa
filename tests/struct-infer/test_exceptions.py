import errno
import json

import pytest
from struct_infer.exceptions import (
    ArgumentError,
    CLIError,
    ConfigurationError,
    DataFormatError,
    FileOperationError,
    NoInputError,
    ParseError,
    RenderError,
    StructInferError,
    handle_known_exceptions,
    wrap_exception,
)


def test_str_includes_details():
    err = ConfigurationError("Bad value", config_key="output_format", config_value="rust")
    assert str(err) == "Bad value (config_key=output_format, config_value=rust)"
    assert str(NoInputError()) == "no JSON data"


def test_hierarchy():
    assert issubclass(DataFormatError, ParseError)
    assert issubclass(ArgumentError, StructInferError)
    assert issubclass(RenderError, StructInferError)


def test_render_error_quotes_identifier():
    err = RenderError("Bad name", target_format="go", identifier="")
    assert err.details["identifier"] == "''"
    assert err.identifier == ""


def test_argument_error_details():
    err = ArgumentError("Missing", argument_name="action", argument_value="show|init")
    assert err.details == {"argument": "action", "value": "show|init"}


def test_wrap_exception():
    original = ValueError("boom")
    wrapped = wrap_exception(original, exception_class=RenderError, target_format="go")
    assert isinstance(wrapped, RenderError)
    assert wrapped.cause is original
    assert str(wrapped) == "boom (target_format=go)"

    already = NoInputError()
    assert wrap_exception(already) is already


def test_handle_known_exceptions_file_errors(tmp_path):
    @handle_known_exceptions
    def read(path):
        with open(path, "rb") as f:
            return f.read()

    with pytest.raises(FileOperationError) as excinfo:
        read(str(tmp_path / "missing"))
    assert isinstance(excinfo.value.cause, FileNotFoundError)


def test_handle_known_exceptions_json_errors():
    @handle_known_exceptions
    def parse(text):
        return json.loads(text)

    with pytest.raises(DataFormatError) as excinfo:
        parse('{"a":\n')
    assert excinfo.value.line_number == 2


def test_handle_known_exceptions_other_os_errors(tmp_path):
    @handle_known_exceptions
    def read(path):
        with open(path, "rb") as f:
            return f.read()

    with pytest.raises(FileOperationError) as excinfo:
        read(str(tmp_path))
    assert str(excinfo.value).startswith("Cannot read input")
    assert excinfo.value.operation == "read"


def test_handle_known_exceptions_device_errors():
    @handle_known_exceptions
    def fail():
        raise OSError(errno.EIO, "Input/output error", "/dev/sdz")

    with pytest.raises(FileOperationError) as excinfo:
        fail()
    assert str(excinfo.value) == (
        "Cannot read input: Input/output error (file_path=/dev/sdz, operation=read)"
    )


def test_cli_error_is_a_plain_struct_infer_error():
    err = CLIError("Cannot run")
    assert err.details == {}
    assert str(err) == "Cannot run"


def test_handle_known_exceptions_passes_through_own_errors():
    @handle_known_exceptions
    def fail():
        raise NoInputError()

    with pytest.raises(NoInputError):
        fail()


def test_handle_known_exceptions_leaves_other_errors():
    @handle_known_exceptions
    def fail():
        raise KeyError("x")

    with pytest.raises(KeyError):
        fail()
