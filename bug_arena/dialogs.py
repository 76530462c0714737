import logging
from collections import deque

logger = logging.getLogger(__name__)


OPENING_MESSAGE = (
    "Welcome, Gladiator, to Bug Arena!\n"
    "Two years ago, oxygen began spewing from the Arctic. "
    "At first, all we noticed was better fuel efficiency and bigger plants. "
    "Then... we got bigger bugs.\n"
    "Rules are simple: 1. Grab the key. 2. Don't get caught. 3. Escape!\n"
    "You get a gun but no bullets. You might find some in the chests."
)

INSTRUCTION_MESSAGE = (
    "Controls\n"
    "Move with the arrow keys. Shoot with A and D.\n"
    "Press P to pause and Enter to resume.\n"
    "Don't get caught by the bugs or fall in the water."
)

PAUSE_MESSAGE = "Game Paused\nPress Enter to resume."

DEATH_MESSAGE = "You got caught!"

GAME_OVER_MESSAGE = "You died\nYour Stats\nLevel: {level}"


class DialogQueue:
    """Blocking dialogs waiting for the player to dismiss them, oldest first."""

    def __init__(self):
        self._pending = deque()

    def show(self, message, on_dismiss=None):
        logger.debug("Dialog opened: %r", message.splitlines()[0])
        self._pending.append((message, on_dismiss))

    @property
    def pending(self):
        return self._pending[0][0] if self._pending else None

    def __len__(self):
        return len(self._pending)

    def dismiss(self):
        """Close the front dialog and run its callback. No-op when nothing is open."""
        if not self._pending:
            return False
        _, on_dismiss = self._pending.popleft()
        if on_dismiss is not None:
            on_dismiss()
        return True


class AutoDismiss:
    """Acknowledges every dialog immediately. For headless runs."""

    pending = None

    def __init__(self, history=32):
        self.shown = deque(maxlen=history)

    def show(self, message, on_dismiss=None):
        self.shown.append(message)
        if on_dismiss is not None:
            on_dismiss()

    def __len__(self):
        return 0

    def dismiss(self):
        return False
