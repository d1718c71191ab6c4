"""
Sign-in and registration form validation.

Each failed check produces a light-hearted message picked at random from the
pool for its kind. Pass a seeded `random.Random` as `rng` for repeatable output.
"""

from __future__ import annotations

import random
import re
import threading
from dataclasses import dataclass
from typing import Any, Callable

from dollerselectro.utils.config import validation_debounce_seconds
from dollerselectro.utils.logger import get_logger

logger = get_logger()

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
NAME_RE = re.compile(r"[a-zA-Z\s'-]+")
USERNAME_RE = re.compile(r"[a-zA-Z0-9_-]{3,}")
PHONE_RE = re.compile(r"[0-9]{10,15}")
MIN_PASSWORD_LENGTH = 6
EMAIL_LIVE_MIN_CHARS = 4

# Live-check delays (seconds) after the last keystroke.
EMAIL_DEBOUNCE = 1.0
FIELD_DEBOUNCE = 0.8
PASSWORD_DEBOUNCE = 1.0
PASSWORD_MATCH_DEBOUNCE = 0.5

EMAIL_ERROR_MESSAGES = [
    "Hmm... 🤔 Is that really an email?\nMaybe try: yourname@example.com?",
    "Wait... 😅 Where's the @ symbol?\nExample: cool.person@mail.com",
    "Oops! 🙈 That doesn't look right!\nTry: awesome@domain.com",
    "Is that a new email format? 🧐\nI only know: user@website.com",
    "Did you forget the @ symbol? 📧\nLike: smart.bulb@lights.com",
]

PASSWORD_MISSING_MESSAGES = [
    "Hold on! 🖐️ You forgot the password!\nI need both email AND password!",
    "Whoa there! 😅 Password field is empty!\nDon't leave me hanging!",
    "Hey! 👋 Where's the password?\nYou can't login with just an email!",
    "Oops! 🙈 Password is missing!\nDid you forget it already?",
    "Wait wait wait! 🛑 No password?\nFill the whole form, please!",
    "Stop! ✋ Password field is empty!\nI promise I won't peek! 😇",
]

EMPTY_FORM_MESSAGES = [
    "Umm... 🤔 Both fields are empty!\nDid you forget something?",
    "Hello? 👋 The form is blank!\nPlease fill in your details!",
    "Hey! 😄 You need to type something!\nEmail AND password, please!",
    "Oops! 🙈 Empty form!\nI can't read minds... yet!",
    "Wait! ✋ Nothing here!\nFill in your email and password!",
    "Whoa! 😅 Blank form!\nI need info to let you in!",
]

ACCOUNT_NOT_FOUND_MESSAGES = [
    "Hmm... 🤔 I don't know you!\nAre you sure you have an account?",
    "Who are you? 👀 Account not found!\nMaybe you need to register first?",
    "Sorry! 😅 I've never seen you before!\nDid you create an account?",
    "Account not found! 🔍\nAre you new here? Try signing up!",
    "Oops! 🙈 Can't find your account!\nDouble-check your email?",
    "Unknown user! 🤷 No account found!\nMaybe time to register?",
]

WRONG_PASSWORD_MESSAGES = [
    "Nope! 🙅 That's not the right password!\nTry again?",
    "Wrong password! 😬\nDid you mix it up with another account?",
    "Not quite! 🤔 Password doesn't match!\nThink harder!",
    "Access denied! 🚫 Wrong password!\nMaybe use 'Forgot Password'?",
    "Oops! 😅 Password is incorrect!\nCaps lock on?",
    "Nah! 🙃 That's not your password!\nOne more try?",
]

PASSWORD_MISMATCH_MESSAGES = [
    "Oops! 🤔 Passwords don't match!\nDouble-check your typing!",
    "Wait! 😅 Those passwords are different!\nTry again carefully!",
    "Hmm... 🧐 Passwords must match!\nCopy-paste if you need to!",
    "Not matching! 🙈 Type carefully!\nTake your time!",
    "Different passwords! 😬\nMake sure they're identical!",
]

WEAK_PASSWORD_MESSAGES = [
    "Too weak! 💪 Add more characters!\nMake it 6+ characters!",
    "Weak password! 🔒 Make it stronger!\nAdd numbers & symbols!",
    "Too short! 😅 Passwords need 6+ chars!\nMake it longer!",
    "Weak! 🛡️ Add more security!\nUse mix of letters & numbers!",
    "Not strong enough! 🔐\nMake it 6+ characters!",
]

INVALID_NAME_MESSAGES = [
    "Names only! 📝 No numbers please!\nUse letters only!",
    "Hey! 🙈 Names don't have numbers!\nLetters only please!",
    "Oops! 🤔 That's not a valid name!\nRemove numbers & symbols!",
    "Wait! 😅 Numbers in your name?\nJust use letters!",
    "Invalid! ❌ Names are letters only!\nNo numbers or symbols!",
]

INVALID_PASSWORD_FORMAT_MESSAGES = [
    "Stronger! 💪 Add uppercase & numbers!\nMake it super secure!",
    "Mix it up! 🔐 Use A-Z, a-z & 0-9!\nBe creative!",
    "Weak format! 🛡️ Add variety!\nUppercase, lowercase & numbers!",
    "Better security! 🔒 Mix letters & numbers!\nAdd uppercase too!",
    "Too simple! 😅 Use uppercase, lowercase\n& numbers together!",
]

EMAIL_EXISTS_MESSAGES = [
    "Hey! 👋 This email is already registered!\nTry logging in instead?",
    "Oops! 😅 Email already exists!\nMaybe you already have an account?",
    "Wait! 🤔 That email is taken!\nDid you forget you signed up?",
    "Already registered! ✅\nTry the 'Sign In' page!",
    "Email exists! 📧 You're already a member!\nJust login!",
]

MISSING_FIELDS_MESSAGES = [
    "Hold on! 🖐️ Fill all fields please!\nEvery detail counts!",
    "Wait! 😅 Some fields are empty!\nComplete the form!",
    "Oops! 🙈 Missing information!\nFill everything in!",
    "Hey! 👋 Don't skip fields!\nI need all your info!",
    "Stop! ✋ Form incomplete!\nFill all the blanks please!",
]

USERNAME_TAKEN_MESSAGES = [
    "Oops! 😅 That username is taken!\nTry something unique!",
    "Sorry! 🤔 Username already exists!\nPick another one!",
    "Nope! 🙈 Someone has that username!\nBe creative!",
    "Taken! 🚫 Try a different username!\nAdd numbers maybe?",
    "Username exists! 😬 Try another!\nMake it unique!",
]

INVALID_USERNAME_MESSAGES = [
    "Username issue! 😅 Use 3+ characters!\nLetters, numbers, _ and - only!",
    "Oops! 🤔 Username too short!\nNeed at least 3 characters!",
    "Invalid username! ❌ Use letters,\nnumbers, underscores & hyphens only!",
    "Username rules! 📝 Min 3 chars,\nletters/numbers/_ /- allowed!",
    "Not valid! 🙈 Username needs 3+ chars!\nNo special symbols except _ and -!",
]

INVALID_PHONE_MESSAGES = [
    "Phone format! 📱 Use numbers only!\nExample: 1234567890",
    "Oops! 😅 Invalid phone number!\nOnly digits please!",
    "Phone issue! 📞 Numbers only!\nRemove spaces & symbols!",
    "Invalid! ❌ Phone needs digits!\nExample: 9876543210",
    "Not valid! 🤔 Use numbers only!\n10 digits work best!",
]

MESSAGE_POOLS: dict[str, list[str]] = {
    "invalid_email": EMAIL_ERROR_MESSAGES,
    "missing_password": PASSWORD_MISSING_MESSAGES,
    "empty_form": EMPTY_FORM_MESSAGES,
    "account_not_found": ACCOUNT_NOT_FOUND_MESSAGES,
    "wrong_password": WRONG_PASSWORD_MESSAGES,
    "password_mismatch": PASSWORD_MISMATCH_MESSAGES,
    "weak_password": WEAK_PASSWORD_MESSAGES,
    "invalid_name": INVALID_NAME_MESSAGES,
    "invalid_password_format": INVALID_PASSWORD_FORMAT_MESSAGES,
    "email_exists": EMAIL_EXISTS_MESSAGES,
    "missing_fields": MISSING_FIELDS_MESSAGES,
    "username_taken": USERNAME_TAKEN_MESSAGES,
    "invalid_username": INVALID_USERNAME_MESSAGES,
    "invalid_phone": INVALID_PHONE_MESSAGES,
}

EMAIL_EXISTS_HINTS = (
    "email already exists",
    "email already registered",
    "email is already in use",
    "user already exists",
    "already registered",
)
USERNAME_TAKEN_HINTS = ("username already exists", "username is taken", "username already taken")
MISSING_FIELDS_HINTS = ("required", "missing", "field")
WEAK_PASSWORD_HINTS = ("weak", "short", "character")
ACCOUNT_NOT_FOUND_HINTS = (
    "user not found",
    "account not found",
    "user does not exist",
    "no user found",
    "not found",
)


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    kind: str | None = None
    message: str = ""


VALID = ValidationResult(ok=True)


def pick_message(kind: str, rng: random.Random | None = None) -> str:
    pool = MESSAGE_POOLS[kind]
    return (rng or random).choice(pool)


def _fail(kind: str, rng: random.Random | None) -> ValidationResult:
    return ValidationResult(ok=False, kind=kind, message=pick_message(kind, rng))


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.fullmatch(email or ""))


def is_valid_name(name: str) -> bool:
    return bool(NAME_RE.fullmatch(name or ""))


def is_valid_username(username: str) -> bool:
    return bool(USERNAME_RE.fullmatch(username or ""))


def is_valid_phone(phone: str) -> bool:
    return bool(PHONE_RE.fullmatch(phone or ""))


def has_password_variety(password: str) -> bool:
    """True when the password mixes uppercase, lowercase and digits."""
    return (
        re.search(r"[A-Z]", password) is not None
        and re.search(r"[a-z]", password) is not None
        and re.search(r"[0-9]", password) is not None
    )


# --- Submit-time validation ---

def validate_login(email: str, password: str, rng: random.Random | None = None) -> ValidationResult:
    if not email and not password:
        return _fail("empty_form", rng)
    if not is_valid_email(email):
        return _fail("invalid_email", rng)
    if not password:
        return _fail("missing_password", rng)
    return VALID


def validate_registration(
    first_name: str,
    last_name: str,
    email: str,
    username: str,
    password: str,
    confirm_password: str,
    phone: str = "",
    rng: random.Random | None = None,
) -> ValidationResult:
    """Check a registration form; the first failing rule wins."""
    if not all((first_name, last_name, email, username, password, confirm_password)):
        return _fail("missing_fields", rng)
    if not is_valid_name(first_name) or not is_valid_name(last_name):
        return _fail("invalid_name", rng)
    if not is_valid_username(username):
        return _fail("invalid_username", rng)
    if not is_valid_email(email):
        return _fail("invalid_email", rng)
    if phone and not is_valid_phone(phone):
        return _fail("invalid_phone", rng)
    if len(password) < MIN_PASSWORD_LENGTH:
        return _fail("weak_password", rng)
    if not has_password_variety(password):
        return _fail("invalid_password_format", rng)
    if password != confirm_password:
        return _fail("password_mismatch", rng)
    return VALID


# --- Live (while typing) checks ---

def check_email_live(email: str, rng: random.Random | None = None) -> ValidationResult:
    """Nothing is reported until a few characters have been typed."""
    if len(email or "") < EMAIL_LIVE_MIN_CHARS:
        return VALID
    return VALID if is_valid_email(email) else _fail("invalid_email", rng)


def check_names_live(first_name: str, last_name: str, rng: random.Random | None = None) -> ValidationResult:
    if first_name and not is_valid_name(first_name):
        return _fail("invalid_name", rng)
    if last_name and not is_valid_name(last_name):
        return _fail("invalid_name", rng)
    return VALID


def check_username_live(username: str, rng: random.Random | None = None) -> ValidationResult:
    if not username or is_valid_username(username):
        return VALID
    return _fail("invalid_username", rng)


def check_phone_live(phone: str, rng: random.Random | None = None) -> ValidationResult:
    if not phone or is_valid_phone(phone):
        return VALID
    return _fail("invalid_phone", rng)


def check_password_live(password: str, rng: random.Random | None = None) -> ValidationResult:
    if not password:
        return VALID
    if len(password) < MIN_PASSWORD_LENGTH:
        return _fail("weak_password", rng)
    if not has_password_variety(password):
        return _fail("invalid_password_format", rng)
    return VALID


def check_password_match_live(
    password: str,
    confirm_password: str,
    rng: random.Random | None = None,
) -> ValidationResult:
    if not password or not confirm_password or password == confirm_password:
        return VALID
    return _fail("password_mismatch", rng)


# --- Backend error mapping ---

def classify_submission_error(error_message: str, mode: str, rng: random.Random | None = None) -> ValidationResult:
    """
    Map a backend error string to a friendly message.

    Args:
        error_message: Message returned by the server (any casing).
        mode: "register" or "login".
        rng: Optional random source for message choice.

    Returns:
        Failed ValidationResult, or VALID for an empty message.
    """
    text = (error_message or "").strip().lower()
    if not text:
        return VALID
    if mode == "register":
        if any(h in text for h in EMAIL_EXISTS_HINTS):
            return _fail("email_exists", rng)
        if any(h in text for h in USERNAME_TAKEN_HINTS):
            return _fail("username_taken", rng)
        if any(h in text for h in MISSING_FIELDS_HINTS):
            return _fail("missing_fields", rng)
        if any(h in text for h in WEAK_PASSWORD_HINTS):
            return _fail("weak_password", rng)
        return _fail("missing_fields", rng)
    if any(h in text for h in ACCOUNT_NOT_FOUND_HINTS):
        return _fail("account_not_found", rng)
    return _fail("wrong_password", rng)


# --- Form progress ---

def completion_level(mode: str, fields: dict[str, Any]) -> float:
    """Percentage (0-100) of required fields that hold non-blank text."""
    if mode == "register":
        required = ("first_name", "last_name", "email", "username", "password", "confirm_password")
    else:
        required = ("email", "password")
    filled = sum(1 for name in required if str(fields.get(name) or "").strip())
    return filled / len(required) * 100


def glow_intensity(level: float) -> float:
    return 0.2 + (level / 100) * 0.8


class Debouncer:
    """
    Run `callback` once input has been quiet for `delay` seconds.

    Every `trigger` cancels the pending call and re-arms the timer with the
    latest arguments.
    """

    def __init__(self, callback: Callable[..., Any], delay: float | None = None) -> None:
        self._callback = callback
        self.delay = validation_debounce_seconds() if delay is None else delay
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def trigger(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay, self._fire, args=args, kwargs=kwargs)
            self._timer.daemon = True
            self._timer.start()

    def _fire(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            self._timer = None
        try:
            self._callback(*args, **kwargs)
        except Exception:
            logger.exception("Debounced callback failed")

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @property
    def pending(self) -> bool:
        return self._timer is not None
