import logging
import os

from dotenv import load_dotenv

from delve.bootstrap import create_game_session
from delve.presentation.game_loop import run_game_loop


def _print_help_surface() -> None:
    print("\nHelp:")
    print("- Move with w/a/s/d, fight with 'attack', type 'help' for every command.")
    print("- Startup issues: verify DELVE_DATABASE_URL or unset it to play without saves on disk.")


def main() -> None:
    load_dotenv()
    logging.basicConfig(level=os.getenv("DELVE_LOG_LEVEL", "WARNING").upper())
    try:
        session = create_game_session()
        run_game_loop(session)
    except KeyboardInterrupt:
        print("\nSession ended.")
    except Exception as exc:
        logging.getLogger(__name__).exception("Game loop crashed")
        print("An unexpected error occurred. The game closed safely.")
        print(f"Reason: {exc}")
        _print_help_surface()


if __name__ == "__main__":
    main()
