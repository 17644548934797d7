from __future__ import annotations

from dataclasses import dataclass

from booking_intake.domain.entities.booking_type import ConsultationType


@dataclass(frozen=True)
class ConsultationOption:
    value: ConsultationType
    label: str
    duration: int  # minutes


@dataclass(frozen=True)
class ChoiceOption:
    value: str
    label: str


CONSULTATION_OPTIONS: tuple[ConsultationOption, ...] = (
    ConsultationOption(ConsultationType.STRATEGY, "Business Strategy", 45),
    ConsultationOption(ConsultationType.TECHNICAL, "Technical Consultation", 60),
    ConsultationOption(ConsultationType.IMPLEMENTATION, "Implementation Planning", 60),
    ConsultationOption(ConsultationType.OPTIMIZATION, "Process Optimization", 45),
    ConsultationOption(ConsultationType.TRAINING, "Training & Education", 30),
    ConsultationOption(ConsultationType.GENERAL, "General Consultation", 30),
)

REVENUE_AUDIT_AREAS: tuple[str, ...] = (
    "Sales Process",
    "Marketing Funnel",
    "Pricing Strategy",
    "Customer Retention",
    "Digital Transformation",
    "Operational Efficiency",
    "Technology Stack",
    "Data Analytics",
)

INDUSTRIES: tuple[str, ...] = (
    "Technology",
    "Healthcare",
    "Finance",
    "E-commerce",
    "Manufacturing",
    "Professional Services",
    "Education",
    "Real Estate",
    "Hospitality",
    "Non-profit",
    "Other",
)

BUDGET_RANGES: tuple[ChoiceOption, ...] = (
    ChoiceOption("under-10k", "Under $10K"),
    ChoiceOption("10k-25k", "$10K - $25K"),
    ChoiceOption("25k-50k", "$25K - $50K"),
    ChoiceOption("50k-100k", "$50K - $100K"),
    ChoiceOption("over-100k", "Over $100K"),
    ChoiceOption("discuss", "Let's discuss"),
)

TIMELINES: tuple[ChoiceOption, ...] = (
    ChoiceOption("asap", "ASAP"),
    ChoiceOption("1-month", "Within 1 month"),
    ChoiceOption("3-months", "Within 3 months"),
    ChoiceOption("6-months", "Within 6 months"),
    ChoiceOption("planning", "Just planning"),
)

# Fixed daily slot enumeration; the backend answers with a subset of these.
DAILY_TIME_SLOTS: tuple[str, ...] = (
    "09:00",
    "10:00",
    "11:00",
    "12:00",
    "13:00",
    "14:00",
    "15:00",
    "16:00",
    "17:00",
)


def choice_label(options: tuple[ChoiceOption, ...], value: str | None) -> str | None:
    for option in options:
        if option.value == value:
            return option.label
    return value
