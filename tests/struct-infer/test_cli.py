import json

import pytest
from struct_infer.cli import main

PEOPLE = '{"name": "Ada", "age": 36}\n{"name": "Grace", "age": 85.5}\n'


# ──────────────────────────────────────────────────────────────────────────────
# In-process
# ──────────────────────────────────────────────────────────────────────────────


def test_generate_go_by_default(isolated_env, write_file, capsys):
    path = write_file("people.json", PEOPLE)
    assert main([path]) == 0
    out = capsys.readouterr().out
    assert out.startswith("var data []*S001 // Unmarshal into this type.\n")
    assert '\tAge  float64 `json:"age,omitempty"`' in out


def test_explicit_generate_subcommand(isolated_env, write_file, capsys):
    path = write_file("one.json", '{"a": 1}')
    assert main(["generate", path, "--color", "never"]) == 0
    assert "type S001 struct {" in capsys.readouterr().out


def test_format_flag(isolated_env, write_file, capsys):
    path = write_file("people.json", PEOPLE)
    assert main([path, "--format", "json_schema"]) == 0
    schema = json.loads(capsys.readouterr().out)
    assert schema["items"] == {"$ref": "#/definitions/S001"}


def test_config_file_sets_format(isolated_env, write_file, capsys):
    (isolated_env / "struct-infer.yml").write_text("output_format: pydantic\n")
    path = write_file("one.json", '{"a": 1}')
    assert main([path]) == 0
    assert "class S001(pydantic.BaseModel):" in capsys.readouterr().out


def test_optional_fields_flag(isolated_env, write_file, capsys):
    path = write_file("rows.json", '{"a": 1}\n{"b": "x"}\n')
    assert main([path, "--optional-fields"]) == 0
    out = capsys.readouterr().out
    assert "\tA *int64" in out
    assert "\tB *string" in out


def test_no_numeric_strings_flag(isolated_env, write_file, capsys):
    path = write_file("one.json", '{"n": "42"}')
    assert main([path, "--no-numeric-strings"]) == 0
    assert '\tN string `json:"n,omitempty"`' in capsys.readouterr().out


def test_record_prefix_flag(isolated_env, write_file, capsys):
    path = write_file("one.json", '{"a": 1}')
    assert main([path, "--record-prefix", "Item"]) == 0
    assert "type Item001 struct {" in capsys.readouterr().out


def test_output_file(isolated_env, write_file, capsys):
    path = write_file("one.json", '{"a": 1}')
    out_path = isolated_env / "out" / "types.go"
    assert main([path, "-o", str(out_path)]) == 0
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "written to" in captured.err
    assert out_path.read_text().startswith("var data *S001")


def test_empty_input_is_an_error(isolated_env, write_file, capsys):
    path = write_file("empty.json", "  \n")
    assert main([path]) == 1
    assert capsys.readouterr().err.strip() == "Error: no JSON data"


def test_invalid_json_is_an_error(isolated_env, write_file, capsys):
    path = write_file("bad.json", '{"a": ')
    assert main([path]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: Invalid JSON")
    assert path in err


def test_missing_file_is_an_error(isolated_env, capsys):
    assert main(["nope.json"]) == 1
    assert "File not found" in capsys.readouterr().err


def test_directory_input_is_an_error(isolated_env, capsys):
    (isolated_env / "data").mkdir()
    assert main(["generate", "data"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: Cannot read input")
    assert "file_path=data" in err


def test_null_document_generates_any(isolated_env, write_file, capsys):
    assert main([write_file("null.json", "null")]) == 0
    assert capsys.readouterr().out == "var data any // Unmarshal into this type.\n"


def test_render_error_is_reported(isolated_env, write_file, capsys):
    path = write_file("bad-key.json", '{"123": 1}')
    assert main([path]) == 1
    assert "not a valid Go identifier" in capsys.readouterr().err


def test_invalid_env_setting_is_reported(isolated_env, write_file, monkeypatch, capsys):
    monkeypatch.setenv("STRUCT_INFER_COLOR", "rainbow")
    path = write_file("one.json", "1")
    assert main([path]) == 1
    assert "Unknown color mode" in capsys.readouterr().err


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.startswith("struct-infer ")


def test_unknown_format_rejected_by_argparse(isolated_env, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["x.json", "--format", "rust"])
    assert excinfo.value.code == 2


def test_config_init_and_show(isolated_env, capsys):
    assert main(["config", "init"]) == 0
    assert (isolated_env / "struct-infer.yml").exists()
    assert "Created config file" in capsys.readouterr().out

    assert main(["config", "show"]) == 0
    out = capsys.readouterr().out
    assert "output_format: go" in out
    assert "Config file: struct-infer.yml" in out


def test_config_init_refuses_to_overwrite(isolated_env, capsys):
    (isolated_env / "struct-infer.yml").write_text("output_format: pydantic\n")
    assert main(["config", "init"]) == 1
    assert "already exists" in capsys.readouterr().err
    assert main(["config", "init", "--force"]) == 0
    assert "output_format: go" in (isolated_env / "struct-infer.yml").read_text()


def test_config_show_without_file(isolated_env, capsys):
    assert main(["config", "show"]) == 0
    assert "No config file found" in capsys.readouterr().out


def test_config_without_action(isolated_env, capsys):
    assert main(["config"]) == 1
    assert "Missing config action" in capsys.readouterr().err


# ──────────────────────────────────────────────────────────────────────────────
# Subprocess
# ──────────────────────────────────────────────────────────────────────────────


def test_stdin_round_trip(run_cli):
    res = run_cli([], input_text='[{"a": 1}, {"a": 2, "b": "x"}]')
    assert res.returncode == 0, res.stderr
    assert res.stdout == (
        "var data []*S001 // Unmarshal into this type.\n"
        "\n"
        "type S001 struct {\n"
        '\tA int64  `json:"a,omitempty"`\n'
        '\tB string `json:"b,omitempty"`\n'
        "}\n"
    )


def test_stdin_multiple_documents(run_cli):
    res = run_cli(["-"], input_text="1\n2.5\n")
    assert res.returncode == 0, res.stderr
    assert res.stdout == "var data []float64 // Unmarshal into this type.\n"


def test_stdin_empty(run_cli):
    res = run_cli([], input_text="")
    assert res.returncode == 1
    assert res.stdout == ""
    assert "no JSON data" in res.stderr


def test_stdin_invalid(run_cli):
    res = run_cli([], input_text="{nope}")
    assert res.returncode == 1
    assert "Invalid JSON" in res.stderr


def test_log_file_and_level(run_cli, tmp_path):
    log_path = tmp_path / "logs" / "run.log"
    res = run_cli(["--log-level", "info", "--log-file", str(log_path)], input_text='{"a": 1}')
    assert res.returncode == 0, res.stderr
    assert "Decoded 1 JSON document(s)" in log_path.read_text()
    assert "INFO" in res.stderr


def test_help_lists_formats(run_cli):
    res = run_cli(["generate", "--help"])
    assert res.returncode == 0
    for fmt in ("go", "pydantic", "json_schema"):
        assert fmt in res.stdout
