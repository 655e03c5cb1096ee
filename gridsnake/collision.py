def remaining_body(segments, will_grow):
    """Segments still occupied once this tick's tail shift has happened."""
    segments = list(segments)
    # Moving into the current tail cell is valid when not growing,
    # because that tail segment moves away on this tick.
    return segments if will_grow else segments[:-1]


def is_self_collision(candidate_head, body):
    """True iff candidate_head lands on a segment of body."""
    return candidate_head in body
