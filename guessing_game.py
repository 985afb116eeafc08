"""
Number Guessing Game - guess the secret number between 1 and 100

Requirements:
    pip install colorama

The game picks a secret number and keeps asking for guesses until you
find it. After every guess it tells you whether you were too small or
too big. Input that is not a whole number is ignored and you are simply
asked again.

How to Use the Script

Play a game:
python guessing_game.py

Play a reproducible game (same secret every time):
python guessing_game.py --seed 1234

Plain output without colors:
python guessing_game.py --no-color

Show debug logs on stderr:
python guessing_game.py -v
"""

import re
import sys
import enum
import random
import logging
import argparse
from colorama import init, Fore, Style

logger = logging.getLogger(__name__)

SECRET_MIN = 1
SECRET_MAX = 100

# Largest value an unsigned 32-bit guess can hold
GUESS_MAX = 2 ** 32 - 1

_GUESS_PATTERN = re.compile(r"\+?[0-9]+")


class GuessingGameError(Exception):
    """Base error for the guessing game"""


class InputStreamError(GuessingGameError):
    """No further line could be read from the input stream"""


class Outcome(enum.Enum):
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    WIN = "win"


class GameState(enum.Enum):
    PROMPTING = "prompting"
    AWAITING_INPUT = "awaiting_input"
    PARSING = "parsing"
    COMPARING = "comparing"
    WON = "won"


class ReadStatus(enum.Enum):
    OK = "ok"
    MALFORMED = "malformed"
    STREAM_FAILED = "stream_failed"


class ReadResult:
    """Result of reading one guess: a parsed value, a malformed line, or a dead stream"""

    def __init__(self, status, guess=None, line=None, reason=None):
        self.status = status
        self.guess = guess
        self.line = line
        self.reason = reason

    @classmethod
    def ok(cls, guess, line):
        return cls(ReadStatus.OK, guess=guess, line=line)

    @classmethod
    def malformed(cls, line):
        return cls(ReadStatus.MALFORMED, line=line)

    @classmethod
    def stream_failed(cls, reason):
        return cls(ReadStatus.STREAM_FAILED, reason=reason)

    def __repr__(self):
        return f"ReadResult({self.status.name}, guess={self.guess!r}, line={self.line!r})"


def parse_guess(text):
    """
    Parse a line of text as a non-negative guess.

    Surrounding whitespace is ignored. An optional leading '+' is allowed,
    any other sign, decimal point or stray character is not.

    Returns:
        int or None: The guess, or None if the text is not a valid guess
    """
    text = text.strip()
    if not _GUESS_PATTERN.fullmatch(text):
        return None
    digits = text.lstrip("+").lstrip("0") or "0"
    # Too many digits to fit, and int() refuses very long strings anyway
    if len(digits) > len(str(GUESS_MAX)):
        return None
    value = int(digits)
    if value > GUESS_MAX:
        return None
    return value


def read_guess(stream):
    """Read one line from the stream and turn it into a ReadResult"""
    try:
        line = stream.readline()
    except (OSError, UnicodeDecodeError) as e:
        return ReadResult.stream_failed(f"Failed to read line: {e}")

    # readline() gives an empty string only at end of stream
    if line == "":
        return ReadResult.stream_failed("Failed to read line: end of input")

    guess = parse_guess(line)
    if guess is None:
        return ReadResult.malformed(line)
    return ReadResult.ok(guess, line)


def compare_guess(guess, secret):
    """Compare a guess to the secret"""
    if guess < secret:
        return Outcome.TOO_SMALL
    if guess > secret:
        return Outcome.TOO_BIG
    return Outcome.WIN


class GuessingGame:
    """One guessing session, played to completion by play()"""

    BANNER = "Guess the number!"
    PROMPT = "Please input your guess."

    def __init__(self, input_stream=None, output_stream=None, rng=None, secret=None, color=True):
        self.input_stream = input_stream if input_stream is not None else sys.stdin
        self.output_stream = output_stream if output_stream is not None else sys.stdout
        self.color = color

        if secret is None:
            rng = rng if rng is not None else random.Random()
            secret = rng.randint(SECRET_MIN, SECRET_MAX)
        elif not SECRET_MIN <= secret <= SECRET_MAX:
            raise ValueError(f"Secret must be between {SECRET_MIN} and {SECRET_MAX}, got {secret}")

        self._secret = secret
        self.attempts = 0
        self.state = GameState.PROMPTING
        logger.debug("Secret drawn from [%d, %d]", SECRET_MIN, SECRET_MAX)

    @property
    def secret(self):
        return self._secret

    def _write(self, message, color=None):
        if self.color and color:
            message = f"{color}{message}{Style.RESET_ALL}"
        print(message, file=self.output_stream, flush=True)

    def feedback(self, outcome):
        """Write the message for an outcome"""
        if outcome is Outcome.TOO_SMALL:
            self._write("Too small!", Fore.YELLOW)
        elif outcome is Outcome.TOO_BIG:
            self._write("Too big!", Fore.YELLOW)
        else:
            noun = "attempt" if self.attempts == 1 else "attempts"
            self._write(f"You win! You guessed it in {self.attempts} {noun}.", Fore.GREEN)

    def step(self):
        """
        Run one turn of the game: prompt, read, parse and compare.

        Returns:
            Outcome or None: The outcome of the turn, None if the line was malformed

        Raises:
            InputStreamError: If no line could be read
        """
        if self.state is GameState.WON:
            raise RuntimeError("Game is already won")

        self.state = GameState.PROMPTING
        self._write(self.PROMPT)

        self.state = GameState.AWAITING_INPUT
        result = read_guess(self.input_stream)
        if result.status is ReadStatus.STREAM_FAILED:
            logger.debug("Input stream failed: %s", result.reason)
            raise InputStreamError(result.reason)

        self.state = GameState.PARSING
        if result.status is ReadStatus.MALFORMED:
            logger.debug("Ignoring malformed guess: %r", result.line)
            self.state = GameState.PROMPTING
            return None

        self.state = GameState.COMPARING
        self.attempts += 1
        self._write(f"You guessed: {result.guess}")
        outcome = compare_guess(result.guess, self._secret)
        logger.debug("Attempt %d: %d -> %s", self.attempts, result.guess, outcome.name)
        self.feedback(outcome)

        self.state = GameState.WON if outcome is Outcome.WIN else GameState.PROMPTING
        return outcome

    def play(self):
        """Play until the secret is guessed and return the number of attempts"""
        if self.state is GameState.WON:
            raise RuntimeError("Game is already won")

        self._write(self.BANNER, Fore.CYAN)
        while self.state is not GameState.WON:
            self.step()
        return self.attempts


def setup_logging(verbose=False):
    """Send log records to stderr, stdout belongs to the game"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def build_parser():
    parser = argparse.ArgumentParser(description='Guess the secret number between 1 and 100')
    parser.add_argument('--seed', type=int, help='Seed for the random number generator')
    parser.add_argument('--no-color', action='store_true', help='Disable colored output')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show debug logs on stderr')
    return parser


def main(argv=None, input_stream=None, output_stream=None):
    """Main function for command line usage"""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)
    # Initialize colorama for cross-platform colored console output
    init()

    color = not args.no_color
    rng = random.Random(args.seed)
    game = GuessingGame(input_stream, output_stream, rng=rng, color=color)

    try:
        game.play()
    except InputStreamError as e:
        message = f"Error: {e}"
        if color:
            message = f"{Fore.RED}{message}{Style.RESET_ALL}"
        print(message, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        message = "\nGame interrupted by user."
        if color:
            message = f"{Fore.YELLOW}{message}{Style.RESET_ALL}"
        print(message, file=sys.stderr)
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
