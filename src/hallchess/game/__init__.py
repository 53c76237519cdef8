"""Game management layer: controller and hardware interfaces.

Quick start::

    from hallchess.core import BoardCoordinates
    from hallchess.game import GameController

    ctrl = GameController()
    ctrl.new_game(player_white=True)
    ctrl.submit_move(BoardCoordinates(0, 52), 36)  # e2e4, engine replies
"""

from hallchess.game.controller import GameController, GameEvents, position_outcome
from hallchess.game.interfaces import GamePhase, ICharacterDisplay, ILedGrid, ISensorBoard

__all__ = [
    # Interfaces
    "GamePhase",
    "ICharacterDisplay",
    "ILedGrid",
    "ISensorBoard",
    # Concrete
    "GameController",
    "GameEvents",
    "position_outcome",
]
