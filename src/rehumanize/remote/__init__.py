"""Client for the remote humanization service."""

from __future__ import annotations

from rehumanize.remote.client import UndetectableClient
from rehumanize.remote.mapping import build_submit_payload
from rehumanize.remote.polling import PollPolicy

__all__ = ["PollPolicy", "UndetectableClient", "build_submit_payload"]
