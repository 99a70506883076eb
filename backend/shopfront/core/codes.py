import secrets

# No 0/O or 1/I: codes get read aloud and typed by hand.
CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
CODE_PREFIX = "DISC-"
CODE_LENGTH = 6


def gen_discount_code(n: int = CODE_LENGTH) -> str:
    suffix = "".join(secrets.choice(CODE_ALPHABET) for _ in range(n))
    return f"{CODE_PREFIX}{suffix}"


def gen_order_id() -> str:
    return f"ord_{secrets.token_hex(8)}"
