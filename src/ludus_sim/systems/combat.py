from __future__ import annotations

from dataclasses import dataclass

from ludus_sim.domain.errors import FighterStateError
from ludus_sim.domain.events import FightEvent, FightEventType
from ludus_sim.domain.types import Fighter
from ludus_sim.rules.ruleset import CombatModel, ConditionModel
from ludus_sim.sim.rng import Rng
from ludus_sim.systems.condition import efficiency


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


@dataclass(frozen=True)
class AttackResolution:
    defender_after: Fighter
    is_hit: bool
    is_critical: bool
    damage: int
    events: tuple[FightEvent, ...]


class CombatResolver:
    """Resolves a single attack. Random draws happen in a fixed order: hit, variance, crit."""

    def __init__(self, model: CombatModel | None = None, condition: ConditionModel | None = None) -> None:
        self.model = model or CombatModel.default()
        self.condition = condition or ConditionModel.default()
        self.model.validate()
        self.condition.validate()

    def hit_chance(self, attacker: Fighter, defender: Fighter) -> float:
        m = self.model
        raw = m.base_hit_chance + (attacker.stats.agility - defender.stats.agility) * m.hit_chance_per_agility_diff
        return _clamp(raw, m.min_hit_chance, m.max_hit_chance)

    def crit_chance(self, attacker: Fighter) -> float:
        m = self.model
        return _clamp(m.base_crit_chance + attacker.stats.agility * m.crit_chance_per_agility, 0.0, m.max_crit_chance)

    def defense(self, defender: Fighter) -> int:
        return round(defender.stats.stamina * self.model.defense_per_stamina)

    def resolve_attack(self, attacker: Fighter, defender: Fighter, rng: Rng, round_number: int) -> AttackResolution:
        if not attacker.is_alive:
            raise FighterStateError(f"Attacker {attacker.name} must be alive")
        if not defender.is_alive:
            raise FighterStateError(f"Defender {defender.name} must be alive")

        def event(event_type: FightEventType, value: float) -> FightEvent:
            return FightEvent(
                round=round_number,
                attacker_name=attacker.name,
                defender_name=defender.name,
                type=event_type,
                value=value,
            )

        m = self.model
        hit = self.hit_chance(attacker, defender)
        if rng.next_double() >= hit:
            return AttackResolution(defender, False, False, 0, (event(FightEventType.MISS, hit),))

        events = [event(FightEventType.HIT, hit)]

        variance = m.damage_variance_min + rng.next_double() * (m.damage_variance_max - m.damage_variance_min)
        damage = round(attacker.stats.strength * 2 * variance * efficiency(attacker, self.condition))

        damage = max(m.min_damage_after_defense, damage - self.defense(defender))

        crit = self.crit_chance(attacker)
        is_critical = rng.next_double() < crit
        if is_critical:
            damage = max(m.min_damage_after_defense, round(damage * m.crit_multiplier))
            events.append(event(FightEventType.CRIT, crit))

        events.append(event(FightEventType.DAMAGE_APPLIED, float(damage)))

        return AttackResolution(
            defender_after=defender.take_damage(damage),
            is_hit=True,
            is_critical=is_critical,
            damage=damage,
            events=tuple(events),
        )
