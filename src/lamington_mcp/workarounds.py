"""Workaround composer: build a replacement from parts already on the shelf.

When the exact component is not available, a workaround template describes
how several available components can stand in for it (two small PSUs for one
large one, a DIY cooling loop from a pump, radiator and fans). Each solution
is scored for reliability, complexity, cost and assembly time, and checked
against electrical, thermal, mechanical and interface safety limits.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from .config import (
    HIGH_POWER_WARNING_THRESHOLD,
    SAFETY_COOLING_CAPACITY,
    SAFETY_MAX_TOTAL_CURRENT,
    SAFETY_MAX_TOTAL_WEIGHT,
    SAFETY_MAX_VOLTAGE_RATIO,
    WORKAROUND_DEGRADATION,
    WORKAROUND_EXTRA_MATCHES,
    WORKAROUND_MATERIALS_COST,
    WORKAROUND_TOOLS_COST,
)
from .models import AuthenticityLevel, Component, ComponentCategory
from .scoring import clamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemplateStep:
    title: str
    description: str
    required_tools: tuple[str, ...]
    estimated_time: int  # minutes
    difficulty: str
    safety_notes: tuple[str, ...] = ()


@dataclass(frozen=True)
class WorkaroundTemplate:
    id: str
    name: str
    description: str
    target_category: ComponentCategory
    minimum_components: int
    required_tools: tuple[str, ...]
    steps: tuple[TemplateStep, ...]
    reliability_factor: float
    complexity_factor: float
    safety_risk: str  # low / medium / high
    accepts: frozenset[ComponentCategory]

    @property
    def base_time(self) -> int:
        return sum(step.estimated_time for step in self.steps)


@dataclass(frozen=True)
class AssemblyStep:
    step_number: int
    title: str
    description: str
    required_tools: tuple[str, ...]
    estimated_time: int
    difficulty: str
    safety_notes: tuple[str, ...] = ()


@dataclass(frozen=True)
class SafetyWarning:
    severity: str
    message: str
    category: str
    precautions: tuple[str, ...] = ()


@dataclass
class WorkaroundSolution:
    id: str
    template_id: str
    name: str
    target_component_id: str
    components: list[Component]
    reliability_score: float
    complexity_score: float
    estimated_cost: float
    estimated_time: int  # minutes
    safety_warnings: list[SafetyWarning] = field(default_factory=list)
    assembly_instructions: list[AssemblyStep] = field(default_factory=list)


@dataclass(frozen=True)
class SafetyReport:
    electrical: bool
    thermal: bool
    mechanical: bool
    compatibility: bool
    issues: tuple[str, ...] = ()

    @property
    def passed(self) -> bool:
        return self.electrical and self.thermal and self.mechanical and self.compatibility


# =============================================================================
# TEMPLATES
# =============================================================================

WORKAROUND_TEMPLATES: dict[ComponentCategory, tuple[WorkaroundTemplate, ...]] = {
    ComponentCategory.POWER_SUPPLY: (
        WorkaroundTemplate(
            id="psu_dual_supply",
            name="Dual Power Supply Solution",
            description="Use two smaller PSUs to replace one large PSU",
            target_category=ComponentCategory.POWER_SUPPLY,
            minimum_components=2,
            required_tools=("Wire strippers", "Electrical tape", "Multimeter", "Soldering iron"),
            steps=(
                TemplateStep("Wire Preparation",
                             "Prepare power distribution wires between {component1} and {component2}",
                             ("Wire strippers", "Electrical tape"), 30, "Medium",
                             ("Use proper gauge wires", "Insulate all connections")),
                TemplateStep("PSU Synchronization",
                             "Bridge the PS_ON signal of {component2} to {component1} for synchronized startup",
                             ("Soldering iron", "Multimeter"), 45, "Hard",
                             ("Test continuity before powering on", "Use proper flux and solder")),
            ),
            reliability_factor=0.7,
            complexity_factor=0.8,
            safety_risk="medium",
            accepts=frozenset({ComponentCategory.POWER_SUPPLY}),
        ),
    ),
    ComponentCategory.GRAPHICS: (
        WorkaroundTemplate(
            id="gpu_external_power",
            name="External GPU Power Mod",
            description="Add external power connector to underpowered GPU",
            target_category=ComponentCategory.GRAPHICS,
            minimum_components=1,
            required_tools=("Soldering iron", "Power connectors", "Multimeter", "Heat gun"),
            steps=(
                TemplateStep("Power Analysis",
                             "Analyze {component1} power requirements and available power rails",
                             ("Multimeter", "Schematic"), 20, "Hard",
                             ("Identify correct voltage rails", "Check current capacity")),
                TemplateStep("Connector Installation",
                             "Install additional power connector on the {category1} PCB",
                             ("Soldering iron", "Power connectors", "Heat gun"), 60, "Expert",
                             ("Use proper temperature control", "Avoid damaging nearby components")),
            ),
            reliability_factor=0.6,
            complexity_factor=0.9,
            safety_risk="high",
            accepts=frozenset({ComponentCategory.GRAPHICS, ComponentCategory.POWER_SUPPLY}),
        ),
    ),
    ComponentCategory.MEMORY: (
        WorkaroundTemplate(
            id="mem_voltage_mod",
            name="Memory Voltage Modification",
            description="Modify memory voltage for compatibility with older systems",
            target_category=ComponentCategory.MEMORY,
            minimum_components=1,
            required_tools=("Precision screwdrivers", "Resistors", "Soldering iron"),
            steps=(
                TemplateStep("Voltage Rail Identification",
                             "Identify the voltage regulation circuit on {component1}",
                             ("Multimeter", "Magnifying glass"), 25, "Hard",
                             ("Work with powered-off system", "Use anti-static precautions")),
                TemplateStep("Resistor Modification",
                             "Replace voltage divider resistors for correct voltage",
                             ("Soldering iron", "Resistors", "Flux"), 40, "Expert",
                             ("Use correct resistor values", "Test voltage before installation")),
            ),
            reliability_factor=0.5,
            complexity_factor=0.85,
            safety_risk="high",
            accepts=frozenset({ComponentCategory.MEMORY}),
        ),
    ),
    ComponentCategory.COOLING: (
        WorkaroundTemplate(
            id="custom_cooling_loop",
            name="DIY Liquid Cooling Loop",
            description="Create custom cooling solution using available pumps and radiators",
            target_category=ComponentCategory.COOLING,
            minimum_components=3,
            required_tools=("Tubing", "Fittings", "Coolant", "Leak tester"),
            steps=(
                TemplateStep("Loop Planning",
                             "Plan loop layout around {component1}, {component2} and {component3}",
                             ("Measuring tape", "Marker"), 30, "Medium",
                             ("Plan for easy maintenance access", "Consider gravity effects")),
                TemplateStep("Component Installation",
                             "Install pump, radiator, and water blocks",
                             ("Screwdrivers", "Thermal paste", "Fittings"), 90, "Hard",
                             ("Ensure proper mounting pressure", "Check all fittings for tightness")),
                TemplateStep("Loop Testing",
                             "Fill and test the cooling loop for leaks",
                             ("Coolant", "Leak tester", "Paper towels"), 45, "Medium",
                             ("Test outside of case first", "Monitor for 24 hours minimum")),
            ),
            reliability_factor=0.8,
            complexity_factor=0.7,
            safety_risk="medium",
            accepts=frozenset({ComponentCategory.COOLING, ComponentCategory.PERIPHERALS}),
        ),
    ),
}

_PRECAUTIONS = ("Verify all connections", "Test thoroughly before use")


def _psu_current_rated(components: list[Component]) -> bool:
    for c in components:
        if c.category != ComponentCategory.POWER_SUPPLY or c.electrical.voltage <= 0:
            continue
        if c.electrical.current > c.electrical.power / c.electrical.voltage:
            return False
    return True


def _gpu_power_limited(components: list[Component]) -> bool:
    return all(c.electrical.power <= 300 for c in components if c.category == ComponentCategory.GRAPHICS)


# Category safety rules: (message, severity, check over all solution components)
SAFETY_RULES: dict[ComponentCategory, tuple[tuple[str, str, Callable[[list[Component]], bool]], ...]] = {
    ComponentCategory.POWER_SUPPLY: (
        ("Never exceed rated current capacity", "critical", _psu_current_rated),
    ),
    ComponentCategory.GRAPHICS: (
        ("Verify power connector ratings", "critical", _gpu_power_limited),
    ),
}


def get_templates(category: ComponentCategory) -> tuple[WorkaroundTemplate, ...]:
    return WORKAROUND_TEMPLATES.get(category, ())


def get_template(template_id: str) -> WorkaroundTemplate | None:
    for templates in WORKAROUND_TEMPLATES.values():
        for template in templates:
            if template.id == template_id:
                return template
    return None


# =============================================================================
# SCORING
# =============================================================================

def _quality(component: Component) -> float:
    return 1.0 if component.authenticity == AuthenticityLevel.OEM else 0.7


def reliability_score(template: WorkaroundTemplate, components: list[Component]) -> float:
    if not components:
        return 0.0
    mean_quality = sum(_quality(c) for c in components) / len(components)
    return clamp(template.reliability_factor * mean_quality * WORKAROUND_DEGRADATION)


def complexity_score(template: WorkaroundTemplate, components: list[Component]) -> float:
    extra = len(components) - template.minimum_components
    categories = len({c.category for c in components})
    return clamp(template.complexity_factor + extra * 0.1 + (categories - 1) * 0.05)


def estimated_cost(components: list[Component]) -> float:
    return sum(c.pricing.retail_price for c in components) + WORKAROUND_TOOLS_COST + WORKAROUND_MATERIALS_COST


def estimated_time(template: WorkaroundTemplate, components: list[Component]) -> int:
    extra = len(components) - template.minimum_components
    return round(template.base_time * (1 + extra * 0.2))


def safety_warnings(template: WorkaroundTemplate, components: list[Component]) -> list[SafetyWarning]:
    risk = template.safety_risk
    warnings = [SafetyWarning(
        severity=risk,
        message=f"This modification has {risk} safety risk",
        category="general",
        precautions=("Follow all safety guidelines", "Use proper tools and equipment"),
    )]

    seen = set()
    for component in components:
        if component.category in seen:
            continue
        seen.add(component.category)
        for message, severity, check in SAFETY_RULES.get(component.category, ()):
            if not check(components):
                warnings.append(SafetyWarning(severity, message, component.category.value, _PRECAUTIONS))

    total_power = sum(c.electrical.power for c in components)
    if total_power > HIGH_POWER_WARNING_THRESHOLD:
        warnings.append(SafetyWarning(
            severity="high",
            message="High power consumption - ensure adequate cooling and power supply",
            category="power",
            precautions=("Use adequate power supply", "Ensure proper cooling", "Monitor temperatures"),
        ))
    return warnings


# =============================================================================
# INSTRUCTIONS
# =============================================================================

_PLACEHOLDER = re.compile(r'\{(component|category)(\d+)\}')


def customize_instruction(text: str, components: list[Component]) -> str:
    """Fill {componentN} / {categoryN} with the Nth component's part number / category."""
    def replace(match: re.Match) -> str:
        kind, index = match.group(1), int(match.group(2))
        if 1 <= index <= len(components):
            component = components[index - 1]
            return component.part_number if kind == "component" else component.category.value
        return f"{kind} {index}"

    return _PLACEHOLDER.sub(replace, text)


def _build_steps(template: WorkaroundTemplate, components: list[Component]) -> list[AssemblyStep]:
    steps = [AssemblyStep(
        step_number=1,
        title="Preparation",
        description="Gather all required components and tools",
        required_tools=template.required_tools,
        estimated_time=10,
        difficulty="Easy",
        safety_notes=("Ensure all devices are powered off", "Work in a static-free environment"),
    )]
    for step in template.steps:
        steps.append(AssemblyStep(
            step_number=len(steps) + 1,
            title=step.title,
            description=customize_instruction(step.description, components),
            required_tools=step.required_tools,
            estimated_time=step.estimated_time,
            difficulty=step.difficulty,
            safety_notes=step.safety_notes,
        ))
    steps.append(AssemblyStep(
        step_number=len(steps) + 1,
        title="Testing",
        description="Test the assembled solution before final installation",
        required_tools=("Multimeter", "Power supply"),
        estimated_time=15,
        difficulty="Medium",
        safety_notes=("Test with low power first", "Monitor for unusual heat or sounds"),
    ))
    steps.append(AssemblyStep(
        step_number=len(steps) + 1,
        title="Final Installation",
        description="Install the completed workaround in the target system",
        required_tools=("Screwdrivers", "Cable ties"),
        estimated_time=20,
        difficulty="Medium",
        safety_notes=("Secure all connections", "Ensure proper ventilation"),
    ))
    return steps


def generate_instructions(solution: WorkaroundSolution) -> list[AssemblyStep]:
    """Full assembly walkthrough: preparation, template steps, testing, installation."""
    template = get_template(solution.template_id)
    if template is None:
        return []
    return _build_steps(template, solution.components)


# =============================================================================
# SAFETY
# =============================================================================

def safety_report(solution: WorkaroundSolution) -> SafetyReport:
    """Run the four safety checks and say which ones failed."""
    components = solution.components
    issues = []

    voltages = [c.electrical.voltage for c in components if c.electrical.voltage > 0]
    ratio_ok = not voltages or max(voltages) / min(voltages) <= SAFETY_MAX_VOLTAGE_RATIO
    total_current = sum(c.electrical.current for c in components)
    current_ok = total_current <= SAFETY_MAX_TOTAL_CURRENT
    if not ratio_ok:
        issues.append(f"Voltage mismatch: {min(voltages)}V to {max(voltages)}V")
    if not current_ok:
        issues.append(f"Total current {total_current:g}A exceeds {SAFETY_MAX_TOTAL_CURRENT:g}A")

    total_power = sum(c.electrical.power for c in components)
    coolers = sum(1 for c in components if c.category == ComponentCategory.COOLING)
    thermal_ok = total_power <= coolers * SAFETY_COOLING_CAPACITY
    if not thermal_ok:
        issues.append(f"Total power {total_power:g}W exceeds cooling capacity of {coolers} cooling component(s)")

    total_weight = sum(c.physical.weight for c in components)
    mechanical_ok = total_weight < SAFETY_MAX_TOTAL_WEIGHT
    if not mechanical_ok:
        issues.append(f"Total weight {total_weight:g}g exceeds {SAFETY_MAX_TOTAL_WEIGHT:g}g")

    missing = [c.id for c in components if not c.compatibility.interface_type]
    if missing:
        issues.append(f"No declared interface: {', '.join(missing)}")

    return SafetyReport(
        electrical=ratio_ok and current_ok,
        thermal=thermal_ok,
        mechanical=mechanical_ok,
        compatibility=not missing,
        issues=tuple(issues),
    )


def validate_safety(solution: WorkaroundSolution) -> bool:
    return safety_report(solution).passed


# =============================================================================
# SEARCH
# =============================================================================

def rank_solutions(solutions: list[WorkaroundSolution]) -> list[WorkaroundSolution]:
    """Reliability desc, complexity asc, cost asc."""
    return sorted(solutions, key=lambda s: (-s.reliability_score, s.complexity_score, s.estimated_cost))


def find_alternatives(target: Component, inventory: list[Component]) -> list[WorkaroundSolution]:
    """Compose workaround solutions for a target from available inventory.

    Args:
        target: Component that is needed but unavailable
        inventory: Components that can be used as building blocks

    Returns:
        Ranked solutions; empty when no template applies or too few parts fit
    """
    solutions = []
    for template in get_templates(target.category):
        matches = [c for c in inventory if c.category in template.accepts and c.id != target.id]
        matches = matches[:template.minimum_components + WORKAROUND_EXTRA_MATCHES]
        if len(matches) < template.minimum_components:
            logger.debug(f"{template.id}: only {len(matches)} of {template.minimum_components} parts available")
            continue

        solutions.append(WorkaroundSolution(
            id=f"workaround_{target.category.value}_{template.id}",
            template_id=template.id,
            name=template.name,
            target_component_id=target.id,
            components=matches,
            reliability_score=reliability_score(template, matches),
            complexity_score=complexity_score(template, matches),
            estimated_cost=estimated_cost(matches),
            estimated_time=estimated_time(template, matches),
            safety_warnings=safety_warnings(template, matches),
            assembly_instructions=_build_steps(template, matches),
        ))
    return rank_solutions(solutions)
