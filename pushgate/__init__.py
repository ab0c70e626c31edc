"""pushgate: pre-push PR-readiness gates."""

from .__about__ import __version__
