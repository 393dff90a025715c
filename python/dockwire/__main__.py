# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

from dockwire.cli.main import cli

cli()
