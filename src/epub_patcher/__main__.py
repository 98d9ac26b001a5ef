from __future__ import annotations

import sys

from .main import main


def cli() -> int:
    """Point d'entrée console: convertit le retour de main() en code de sortie."""
    try:
        return int(main() or 0)
    except KeyboardInterrupt:  # pragma: no cover
        sys.stderr.write("Interrupted\n")
        return 130


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(cli())
