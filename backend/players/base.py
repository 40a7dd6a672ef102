"""
Base player interface for the arcade engine.
"""

from domain.run import RunController


class Player:
    """
    Base class/interface for headless player logic.

    A player looks at a live game and applies whatever controls it wants
    (change direction, rotate, drop...) before the next slice of time runs.
    """

    def choose_action(self, game: RunController) -> None:
        """
        Inspect the game and apply this tick's input.

        Args:
            game: The running game controller
        """
        raise NotImplementedError
