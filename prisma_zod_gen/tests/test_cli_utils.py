#!/usr/bin/env python3

import click
import pytest
from click.testing import CliRunner

from prisma_zod_gen.cli_utils import reconstruct_command_line
from prisma_zod_gen.prisma_zod_gen import prisma_zod_gen


@click.command()
@click.option("--config", "-c", default=None, type=click.Path())
@click.option("--enum-namespace", default=None)
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", type=click.Path())
def report(config, enum_namespace, verbose, path):
    click.echo(reconstruct_command_line(report))


class TestCliUtils:
    """Test cases for CLI utilities"""

    def test_reconstruct_command_line_without_context(self):
        """Test command reconstruction without active Click context (fallback)"""
        assert reconstruct_command_line(prisma_zod_gen) == "prisma_zod_gen"

    def test_paths_are_reported_by_name(self):
        """Test that path values lose their directories"""
        result = CliRunner().invoke(report, ["-c", "conf/gen.json", "client/index.d.ts"])

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "prisma_zod_gen index.d.ts --config gen.json"

    def test_output_neutral_options_are_left_out(self):
        """Test that unset options and logging flags are not reported"""
        result = CliRunner().invoke(report, ["-v", "--enum-namespace", "Enums", "index.d.ts"])

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "prisma_zod_gen index.d.ts --enum-namespace Enums"


if __name__ == "__main__":
    pytest.main([__file__])
