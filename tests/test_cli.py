"""
Tests for cli.py

Validates:
- generate writes beans for modules and description files
- exit code 1 when any record failed, 0 otherwise
- input and configuration errors are reported without a traceback
"""

import json

import pytest

from beanerator.cli import create_parser, main


@pytest.fixture
def description_file(tmp_path, describe):
    path = tmp_path / "records.json"
    document = {
        "records": [
            describe("shop.Item", [("name", "String"), ("price", "shop.Price")], visibility="public"),
            describe("shop.Price", [("amount", "int")]),
        ]
    }
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_generate_demo_modules(tmp_path, capsys):
    out = tmp_path / "out"
    code = main(["generate", "beanerator.demo.coffee", "beanerator.demo.order", "-o", str(out)])

    assert code == 0
    demo = out / "beanerator" / "demo"
    assert sorted(p.name for p in demo.iterdir()) == [
        "coffee_bean.py",
        "order_bean.py",
        "taste_bean.py",
    ]
    assert "class CoffeeBean:" in (demo / "coffee_bean.py").read_text(encoding="utf-8")
    assert "3 of 3 bean(s) generated" in capsys.readouterr().out


def test_generate_java_from_description_file(tmp_path, description_file):
    out = tmp_path / "out"
    code = main(["generate", str(description_file), "-t", "java", "-o", str(out)])

    assert code == 0
    item = (out / "shop" / "ItemBean.java").read_text(encoding="utf-8")
    assert "public final class ItemBean {" in item
    assert (out / "shop" / "PriceBean.java").exists()


def test_generate_prints_without_output_dir(capsys):
    code = main(["generate", "beanerator.demo.coffee"])

    assert code == 0
    output = capsys.readouterr().out
    assert "class TasteBean" in output
    assert "class CoffeeBean" in output


def test_failures_set_exit_code(tmp_path, capsys):
    code = main(["generate", "tests.records", "-o", str(tmp_path)])

    assert code == 1
    assert (tmp_path / "tests" / "point_bean.py").exists()
    assert not (tmp_path / "tests" / "broken_bean.py").exists()
    assert "Failed to beanerate" in capsys.readouterr().out


def test_no_comments_and_config_file(tmp_path):
    config = tmp_path / "beans.json"
    config.write_text(json.dumps({"header_comment": "Do not edit."}), encoding="utf-8")
    out = tmp_path / "out"

    assert main(["generate", "beanerator.demo.coffee", "--config", str(config), "-o", str(out)]) == 0
    source = (out / "beanerator" / "demo" / "taste_bean.py").read_text(encoding="utf-8")
    assert source.startswith('"""Do not edit."""')

    assert main(["generate", "beanerator.demo.coffee", "--no-comments", "-o", str(out)]) == 0
    source = (out / "beanerator" / "demo" / "taste_bean.py").read_text(encoding="utf-8")
    assert '"""' not in source


def test_invalid_workers_in_config_file(tmp_path, capsys):
    config = tmp_path / "beans.json"
    config.write_text(json.dumps({"max_workers": "4"}), encoding="utf-8")

    assert main(["generate", "beanerator.demo.coffee", "--config", str(config)]) == 1
    assert "max_workers must be a positive integer" in capsys.readouterr().out


def test_parallel_workers(tmp_path):
    out = tmp_path / "out"
    code = main(
        ["generate", "beanerator.demo.coffee", "beanerator.demo.order", "--workers", "3", "-o", str(out)]
    )
    assert code == 0
    assert len(list((out / "beanerator" / "demo").iterdir())) == 3


def test_log_file(tmp_path):
    log_file = tmp_path / "beanerator.log"
    main(
        [
            "--log-level",
            "INFO",
            "--log-file",
            str(log_file),
            "generate",
            "beanerator.demo.coffee",
            "-o",
            str(tmp_path / "out"),
        ]
    )
    assert "Generating bean for beanerator.demo.coffee.Coffee..." in log_file.read_text(
        encoding="utf-8"
    )


@pytest.mark.parametrize(
    "argv, message",
    [
        (["generate", "beanerator.demo.coffee", "-t", "cobol"], "No generator registered"),
        (["generate", "missing.json"], "File not found"),
        (["generate", "no.such.module"], "Cannot import module"),
        (["generate", "beanerator.demo.coffee", "--workers", "0"], "--workers"),
    ],
)
def test_input_errors(capsys, argv, message):
    assert main(argv) == 1
    assert message in capsys.readouterr().out


def test_languages(capsys):
    assert main(["languages"]) == 0
    output = capsys.readouterr().out
    assert "python" in output
    assert "java" in output
    assert "PythonGenerator" in output


def test_no_command():
    assert main([]) == 1


def test_generate_requires_a_source():
    with pytest.raises(SystemExit):
        create_parser().parse_args(["generate"])
