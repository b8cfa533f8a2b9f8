from __future__ import annotations

from typing import Any, Dict

from .decorators import is_board_admin


def board_admin(request) -> Dict[str, Any]:
    """Expose whether the current session may edit the board.

    Injects:
      - is_board_admin: True after a successful admin login
    """
    return {"is_board_admin": is_board_admin(request)}
