"""Authenticity assessment: OEM vs first-copy heuristics.

A component's authenticity confidence (0-100) is derived from three
independent signals:

1. Weight: measured weight against the expected OEM weight for its
   category (base weight plus per-core / per-GB / per-watt adders).
2. Thermal: heat-sync quality, thermal conductivity, cooling efficiency and
   material quality estimated from per-category thermal profiles.
3. Build quality: category quality indicators combined with the shared
   weighted-scoring contract.

plus a fixed adjustment for the declared authenticity level. Every function
is total: unknown categories and zero-sized or zero-power components fall
back to neutral defaults instead of raising.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from .models import AuthenticityLevel, Component, ComponentCategory
from .scoring import Criterion, clamp, weighted_score

logger = logging.getLogger(__name__)


# =============================================================================
# OEM STANDARDS
# =============================================================================

@dataclass(frozen=True)
class OEMStandard:
    base_weight: float  # g
    tolerance: float  # % either side of the expected weight
    per_core: float = 0.0
    per_ghz: float = 0.0
    per_gb: float = 0.0
    per_watt: float = 0.0


OEM_STANDARDS: dict[ComponentCategory, OEMStandard] = {
    ComponentCategory.PROCESSOR: OEMStandard(base_weight=80, tolerance=15, per_core=5, per_ghz=2),
    ComponentCategory.MEMORY: OEMStandard(base_weight=40, tolerance=10, per_gb=2),
    ComponentCategory.GRAPHICS: OEMStandard(base_weight=500, tolerance=20, per_watt=3),
}


@dataclass(frozen=True)
class ThermalProfile:
    heat_sync_efficiency: float
    thermal_conductivity: float  # W/mK
    thermal_mass: float
    cooling_requirement: float


THERMAL_PROFILES: dict[ComponentCategory, ThermalProfile] = {
    ComponentCategory.PROCESSOR: ThermalProfile(0.85, 150, 0.02, 1.5),
    ComponentCategory.GRAPHICS: ThermalProfile(0.9, 200, 0.1, 2.0),
    ComponentCategory.MEMORY: ThermalProfile(0.6, 50, 0.005, 0.5),
}

NEUTRAL_THERMAL_SCORE = 0.5
NEUTRAL_QUALITY_SCORE = 0.5

# Added to the confidence score for the declared authenticity level
AUTHENTICITY_ADJUSTMENT: dict[AuthenticityLevel, float] = {
    AuthenticityLevel.OEM: 20,
    AuthenticityLevel.FIRST_COPY: 10,
    AuthenticityLevel.GENERIC: -10,
    AuthenticityLevel.UNKNOWN: -20,
}

_CORE_COUNTS = {"3": 4, "5": 6, "7": 8, "9": 12}
_INTEL_TIER = re.compile(r'\b[ir]([3579])(?!\d)', re.IGNORECASE)
_RYZEN_TIER = re.compile(r'ryzen\s*([3579])', re.IGNORECASE)
_CAPACITY = re.compile(r'(\d+)\s*gb', re.IGNORECASE)


@dataclass(frozen=True)
class WeightComparison:
    measured_weight: float
    oem_standard_weight: float
    variance: float  # percent
    within_tolerance: bool


@dataclass(frozen=True)
class ThermalAssessment:
    heat_sync_quality: float
    thermal_conductivity: float
    cooling_efficiency: float
    material_quality: float

    @property
    def mean(self) -> float:
        return (self.heat_sync_quality + self.thermal_conductivity
                + self.cooling_efficiency + self.material_quality) / 4


@dataclass(frozen=True)
class QualityMetrics:
    build_quality: float  # 0-10
    material_grade: float  # 0-10
    finish_quality: float  # 0-10
    overall_score: float  # 0-1
    indicators: dict[str, float]


@dataclass(frozen=True)
class AuthenticityAssessment:
    component_id: str
    authenticity_level: AuthenticityLevel
    confidence_score: float  # 0-100
    weight_analysis: WeightComparison
    thermal_analysis: ThermalAssessment
    quality_indicators: QualityMetrics
    breakdown: dict[str, float]


# =============================================================================
# ESTIMATORS
# =============================================================================

def estimate_core_count(component: Component) -> int:
    """Core count from the model tier (i7, R7, Ryzen 7) or from clock speed."""
    part = component.part_number
    match = _RYZEN_TIER.search(part) or _INTEL_TIER.search(part)
    if match:
        return _CORE_COUNTS[match.group(1)]
    ghz = component.electrical.frequency / 1000
    return max(2, min(16, round(ghz * 2)))


def estimate_memory_capacity(component: Component) -> int:
    """Capacity in GB from the part number, else guessed from speed."""
    match = _CAPACITY.search(component.part_number)
    if match:
        return int(match.group(1))
    frequency = component.electrical.frequency
    if frequency >= 3200:
        return 16
    if frequency >= 2400:
        return 8
    return 4


def expected_weight(component: Component, standard: OEMStandard) -> float:
    weight = standard.base_weight
    if component.category == ComponentCategory.PROCESSOR:
        weight += estimate_core_count(component) * standard.per_core
        weight += component.electrical.frequency / 1000 * standard.per_ghz
    elif component.category == ComponentCategory.MEMORY:
        weight += estimate_memory_capacity(component) * standard.per_gb
    elif component.category == ComponentCategory.GRAPHICS:
        weight += component.electrical.power * standard.per_watt
    return weight


def analyze_weight(component: Component) -> WeightComparison:
    """Compare measured weight with the expected OEM weight.

    Categories without an OEM standard compare against themselves (zero
    variance, within tolerance).
    """
    measured = component.physical.weight
    standard = OEM_STANDARDS.get(component.category)
    if standard is None:
        return WeightComparison(measured, measured, 0.0, True)

    expected = expected_weight(component, standard)
    variance = (measured - expected) / expected * 100
    return WeightComparison(
        measured_weight=measured,
        oem_standard_weight=expected,
        variance=variance,
        within_tolerance=abs(variance) <= standard.tolerance,
    )


# =============================================================================
# THERMAL
# =============================================================================

def _heat_sync_quality(profile: ThermalProfile, power_density: float) -> float:
    required = min(1.0, power_density / 100)
    if profile.heat_sync_efficiency >= required:
        return 0.9
    return profile.heat_sync_efficiency / required


def _thermal_conductivity(profile: ThermalProfile, power: float) -> float:
    return min(1.0, profile.thermal_conductivity / max(power * 0.5, 50))


def _cooling_efficiency(profile: ThermalProfile, power: float) -> float:
    if power <= 0:
        return 1.0
    return min(1.0, profile.thermal_mass * profile.cooling_requirement / (power * 0.01))


def _material_quality(weight: WeightComparison) -> float:
    if weight.within_tolerance:
        return 0.9
    return max(0.3, 0.9 - abs(weight.variance) / 100)


def assess_heat_sync(component: Component) -> ThermalAssessment:
    profile = THERMAL_PROFILES.get(component.category)
    if profile is None:
        n = NEUTRAL_THERMAL_SCORE
        return ThermalAssessment(n, n, n, n)

    area = component.physical.footprint_area
    power = component.electrical.power
    power_density = power / area if area > 0 else 0.0

    return ThermalAssessment(
        heat_sync_quality=clamp(_heat_sync_quality(profile, power_density)),
        thermal_conductivity=clamp(_thermal_conductivity(profile, power)),
        cooling_efficiency=clamp(_cooling_efficiency(profile, power)),
        material_quality=clamp(_material_quality(analyze_weight(component))),
    )


# =============================================================================
# QUALITY INDICATORS
# =============================================================================

BUILD = "build"
MATERIAL = "material"
FINISH = "finish"


@dataclass(frozen=True)
class QualityIndicator:
    name: str
    weight: float
    grade: str  # BUILD, MATERIAL or FINISH
    assess: Callable[[Component], float]


def _die_quality(c: Component) -> float:
    power = c.electrical.power
    if power <= 0:
        return 0.0
    return min(1.0, c.electrical.frequency / power / 30)


def _package_quality(c: Component) -> float:
    volume = c.physical.volume_cm3
    density = c.physical.weight / volume if volume > 0 else 0.0
    return 0.9 if density > 2.0 else 0.6


def _thermal_interface(c: Component) -> float:
    return 0.95 if c.authenticity == AuthenticityLevel.OEM else 0.7


def _weight_precision(c: Component) -> float:
    return 0.9 if analyze_weight(c).within_tolerance else 0.6


def _speed_grade(c: Component) -> float:
    return min(1.0, c.electrical.frequency / 3200)


def _pcb_finish(c: Component) -> float:
    if c.authenticity == AuthenticityLevel.OEM:
        return 0.95
    if c.authenticity == AuthenticityLevel.FIRST_COPY:
        return 0.75
    return 0.6


def _power_delivery(c: Component) -> float:
    return 0.9 if c.electrical.power > 0 and c.electrical.voltage == 12 else 0.6


def _cooler_mass(c: Component) -> float:
    return 0.9 if analyze_weight(c).within_tolerance else 0.5


QUALITY_INDICATORS: dict[ComponentCategory, tuple[QualityIndicator, ...]] = {
    ComponentCategory.PROCESSOR: (
        QualityIndicator("Die Quality", 0.3, BUILD, _die_quality),
        QualityIndicator("Package Quality", 0.25, BUILD, _package_quality),
        QualityIndicator("Thermal Interface", 0.25, MATERIAL, _thermal_interface),
        QualityIndicator("Manufacturing Precision", 0.2, FINISH, _weight_precision),
    ),
    ComponentCategory.MEMORY: (
        QualityIndicator("Module Weight", 0.4, BUILD, _weight_precision),
        QualityIndicator("Speed Grade", 0.3, MATERIAL, _speed_grade),
        QualityIndicator("PCB Finish", 0.3, FINISH, _pcb_finish),
    ),
    ComponentCategory.GRAPHICS: (
        QualityIndicator("Cooler Mass", 0.35, BUILD, _cooler_mass),
        QualityIndicator("Power Delivery", 0.3, MATERIAL, _power_delivery),
        QualityIndicator("Board Finish", 0.35, FINISH, _pcb_finish),
    ),
}


def assess_quality_metrics(component: Component) -> QualityMetrics:
    """Grade build, material and finish (0-10) plus an overall 0-1 score."""
    indicators = QUALITY_INDICATORS.get(component.category, ())
    if not indicators:
        grade = NEUTRAL_QUALITY_SCORE * 10
        return QualityMetrics(grade, grade, grade, NEUTRAL_QUALITY_SCORE, {})

    scores = {ind.name: clamp(ind.assess(component)) for ind in indicators}

    def grade(bucket: str) -> float:
        criteria = [Criterion(i.name, i.weight, scores[i.name]) for i in indicators if i.grade == bucket]
        return weighted_score(criteria, default=NEUTRAL_QUALITY_SCORE).score * 10

    overall = weighted_score([Criterion(i.name, i.weight, scores[i.name]) for i in indicators])
    return QualityMetrics(
        build_quality=grade(BUILD),
        material_grade=grade(MATERIAL),
        finish_quality=grade(FINISH),
        overall_score=overall.score,
        indicators=scores,
    )


# =============================================================================
# CONFIDENCE SCORE
# =============================================================================

BASE_SCORE = 50.0
WEIGHT_BONUS = 30.0
THERMAL_SHARE = 25.0
QUALITY_SHARE = 25.0


def calculate_authenticity_score(component: Component) -> AuthenticityAssessment:
    """Combine weight, thermal and quality signals into a 0-100 confidence.

    Args:
        component: Component to assess

    Returns:
        AuthenticityAssessment with the per-signal breakdown
    """
    weight = analyze_weight(component)
    thermal = assess_heat_sync(component)
    quality = assess_quality_metrics(component)

    if weight.within_tolerance:
        weight_points = WEIGHT_BONUS
    else:
        weight_points = -min(WEIGHT_BONUS, abs(weight.variance) * 2)
    thermal_points = thermal.mean * THERMAL_SHARE
    quality_points = quality.overall_score * QUALITY_SHARE
    level_points = AUTHENTICITY_ADJUSTMENT[component.authenticity]

    raw = BASE_SCORE + weight_points + thermal_points + quality_points + level_points
    score = clamp(raw, 0.0, 100.0)

    logger.debug(
        f"Authenticity {component.id}: weight {weight.variance:+.1f}% -> {weight_points:+.1f}, "
        f"thermal {thermal_points:.1f}, quality {quality_points:.1f}, level {level_points:+.0f} = {score:.1f}"
    )
    return AuthenticityAssessment(
        component_id=component.id,
        authenticity_level=component.authenticity,
        confidence_score=score,
        weight_analysis=weight,
        thermal_analysis=thermal,
        quality_indicators=quality,
        breakdown={
            "base": BASE_SCORE,
            "weight": weight_points,
            "thermal": thermal_points,
            "quality": quality_points,
            "authenticity_level": level_points,
        },
    )
