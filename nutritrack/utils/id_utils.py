from nanoid import generate

ID_SIZE = 21


def generate_id(size: int = ID_SIZE) -> str:
    """URL-safe nanoid used for plans, saved meals, health records and tracked meals."""
    return generate(size=size)
