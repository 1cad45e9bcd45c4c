"""Version code calculation."""

SECONDS_PER_YEAR = 365 * 24 * 60 * 60


def time_component(
    origin_timestamp: int, initial_timestamp: int, year_factor: int
) -> int:
    """Elapsed time between the root and the origin commit, scaled per year.

    ``year_factor`` is the number of code points one year of history is
    worth; 0 disables the component. Roots dated at or before the epoch and
    non-positive durations contribute 0.
    """
    if year_factor <= 0 or initial_timestamp <= 0:
        return 0
    elapsed = origin_timestamp - initial_timestamp
    if elapsed <= 0:
        return 0
    return int(elapsed * year_factor / SECONDS_PER_YEAR + 0.5)


def version_code(base_branch_commit_count: int, time_points: int = 0) -> int:
    """Commits on the base branch up to the origin, plus optional time points."""
    return base_branch_commit_count + max(time_points, 0)
