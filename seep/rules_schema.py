"""Validation schema for Seep rules configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field, validator

DECK_SIZE = 52
SEATS = 4


class DealConfig(BaseModel):
    hand_size: int = Field(4, ge=1, description="Cards dealt to each seat in the opening deal.")
    board_size: int = Field(4, ge=0, description="Loose cards dealt face down to the board.")
    remaining_per_seat: int = Field(8, ge=0, description="Cards each seat receives in the remaining deal.")
    remaining_deal_move: int = Field(
        4,
        ge=2,
        description="Move count at which the remaining cards must be dealt.",
    )
    max_attempts: int = Field(50, ge=1, description="Reshuffles allowed before the opening deal fails.")


class TimerConfig(BaseModel):
    move_timeout_seconds: float = Field(
        30.0,
        gt=0,
        description="Deadline after which the external timer submits an automatic throw-away.",
    )


class RuleSet(BaseModel):
    call_values: list[int] = Field(default_factory=lambda: [9, 10, 11, 12, 13])
    seep_bonus: int = Field(50, ge=0, description="Points for clearing the board with a pickup.")
    seep_cap: int = Field(2, ge=0, description="Seeps a team may bank before further seeps are reversed.")
    max_stacks: int = Field(2, ge=1, description="Stacks allowed on the board at the same time.")
    max_manual_cards: int = Field(
        4,
        ge=2,
        description="Cards a player may place into a new or value-modified stack.",
    )
    deal: DealConfig = Field(default_factory=DealConfig)
    timers: TimerConfig = Field(default_factory=TimerConfig)

    @validator("call_values")
    def validate_call_values(cls, value: list[int]) -> list[int]:
        if not value:
            raise ValueError("At least one call value is required.")
        for call in value:
            if call < 1 or call > 13:
                raise ValueError(f"Call value {call} is not a card face value.")
        return sorted(set(value))

    @validator("deal")
    def validate_deal_layout(cls, value: DealConfig) -> DealConfig:
        used = SEATS * value.hand_size + value.board_size + SEATS * value.remaining_per_seat
        if used != DECK_SIZE:
            raise ValueError(f"Deal layout uses {used} cards; the deck has {DECK_SIZE}.")
        return value


DEFAULT_RULES = RuleSet()
