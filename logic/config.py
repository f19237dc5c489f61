"""
Game configuration for TicTacToe.
All the settings for the board, the AI scoring, and the console session.
"""


class GameConfig:
    """
    Configuration class for game settings.
    Change these values to tweak how the AI and the console game behave.
    """

    # ==================== BOARD SETTINGS ====================
    # TicTacToe is a 3x3 grid (fixed)
    BOARD_SIZE = 3

    # ==================== MINIMAX SCORES ====================
    # Leaf values seen by the unbeatable strategy
    WIN_SCORE = 10
    LOSE_SCORE = -10
    DRAW_SCORE = 0

    # ==================== AI SETTINGS ====================
    # Strategy a new AI player starts with: "random" or "unbeatable"
    DEFAULT_STRATEGY = "random"

    # Seed for the random strategy (None = fresh entropy every game)
    RANDOM_SEED = None

    # ==================== SESSION SETTINGS ====================
    # True = the human plays X and moves first
    HUMAN_ATTACKS = True

    # ==================== DEBUG SETTINGS ====================
    DEBUG_MODE = False
