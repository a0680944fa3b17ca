from __future__ import annotations


class MuseumNightError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SearchCancelled(MuseumNightError):
    def __init__(self, evaluated: int) -> None:
        super().__init__(f"route search cancelled after {evaluated} permutations")
        self.evaluated = evaluated


class TooManyStopsError(MuseumNightError):
    def __init__(self, requested: int, limit: int) -> None:
        super().__init__(
            f"{requested} museums selected; the exact route search supports at most {limit}"
        )
        self.requested = requested
        self.limit = limit


class CatalogueError(MuseumNightError):
    pass
