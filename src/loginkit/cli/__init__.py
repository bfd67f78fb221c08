"""Command-line interface for loginkit."""

from __future__ import annotations

import asyncio as asyncio
import logging as logging

from loginkit import LoginFlow as LoginFlow
from loginkit.cli.app import main as main
from loginkit.cli.commands import login as login_command
from loginkit.cli.parser import build_parser as build_parser

_format_summary = login_command.format_login_summary
_run_login = login_command.run_login
