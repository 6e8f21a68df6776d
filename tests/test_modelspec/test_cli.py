"""Tests for modelspec.cli module."""
from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_logging():
    """main() configures the package logger; undo it after each test."""
    logger = logging.getLogger('modelspec')
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


@pytest.fixture
def specs_file(temp_dir):
    path = temp_dir / 'model_specs.yml'
    path.write_text(
        "lasso:\n"
        "  model: linear_reg\n"
        "  engine: glmnet\n"
        "  args:\n"
        "    penalty: 0.01\n"
        "forest:\n"
        "  model: rand_forest\n"
        "  args:\n"
        "    trees: 10\n"
    )
    return path


class TestArgumentParsing:
    """Tests for command-line parsing."""

    def test_requires_command(self):
        from modelspec.cli import parse_args

        with pytest.raises(SystemExit):
            parse_args([])

    def test_check_arguments(self):
        from modelspec.cli import parse_args

        args = parse_args(['check', 'linear_reg', 'glmnet', 'regression'])

        assert args.cmd == 'check'
        assert (args.model, args.engine, args.mode) == ('linear_reg', 'glmnet', 'regression')


class TestCommands:
    """Tests for running commands through main()."""

    def test_show_engines(self, capsys):
        from modelspec.cli import main

        assert main(['show_engines', 'linear_reg']) == 0
        out = capsys.readouterr().out
        assert 'glmnet' in out
        assert 'lm' in out

    def test_show_engines_unknown_model(self, capsys):
        from modelspec.cli import main

        assert main(['show_engines', 'no_model']) == 1
        assert 'No results found' in capsys.readouterr().err

    def test_check_available(self, capsys):
        from modelspec.cli import main

        assert main(['check', 'linear_reg', 'glmnet', 'regression']) == 0
        assert 'available' in capsys.readouterr().out

    def test_check_missing_extension(self, capsys):
        from modelspec.cli import main

        assert main(['check', 'proportional_hazards', 'glmnet', 'censored_regression']) == 1
        out = capsys.readouterr().out
        assert 'The extension package censored' in out
        assert 'Please install' in out

    def test_show_call(self, capsys, specs_file):
        from modelspec.cli import main

        assert main(['show_call', 'lasso', '--specs', str(specs_file)]) == 0
        out = capsys.readouterr().out
        assert 'modelspec.engines.glmnet.elastic_net_path(' in out
        assert 'lambda_=0.01' in out

    def test_show_call_without_mode_fails(self, capsys, specs_file):
        from modelspec.cli import main

        assert main(['show_call', 'forest', '--specs', str(specs_file)]) == 1
        assert 'depends on the mode' in capsys.readouterr().err

    def test_show_call_missing_file(self, capsys, temp_dir):
        from modelspec.cli import main

        assert main(['show_call', 'lasso', '--specs', str(temp_dir / 'none.yml')]) == 1
        assert 'not found' in capsys.readouterr().err

    def test_registry(self, capsys):
        from modelspec.cli import main

        assert main(['registry', '--model', 'proportional_hazards']) == 0
        out = capsys.readouterr().out
        assert 'survival' in out
        assert 'linear_reg' not in out
