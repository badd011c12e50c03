# SPDX-License-Identifier: CC0-1.0

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


class UnknownQuickAction(KeyError):
    pass


@dataclass(frozen=True)
class QuickAction:
    id: str
    label: str
    response: str
    show_contact: bool = False


QUICK_ACTIONS: Dict[str, QuickAction] = {
    action.id: action
    for action in (
        QuickAction(
            id="identify",
            label="Identify Plant",
            response=(
                'To identify a plant, click the "Identify Plant" button on our homepage and '
                "upload a clear photo. Our AI will analyze the image and provide species "
                "identification with care recommendations."
            ),
        ),
        QuickAction(
            id="premium",
            label="Premium Features",
            response=(
                "Premium features include unlimited identifications, advanced AI health "
                "predictions, disease diagnosis, expert consultations, achievement system, "
                "and priority support. Plans start at $9.99/month."
            ),
        ),
        QuickAction(
            id="care",
            label="Plant Care Tips",
            response=(
                "Plant care depends on the species, but generally includes proper watering, "
                "adequate light, good soil, and regular monitoring for pests. After "
                "identifying your plant, you will get specific care instructions."
            ),
        ),
        QuickAction(
            id="contact",
            label="Contact Support",
            response=(
                "Here are our contact details for direct support. Our team is available to "
                "help with any questions."
            ),
            show_contact=True,
        ),
    )
}


def get_quick_action(action_id: str) -> Optional[QuickAction]:
    return QUICK_ACTIONS.get(action_id)


@dataclass(frozen=True)
class ContactDetails:
    email: str = "support@greenlens.ai"
    phone: str = "1-800-GREENLENS (1-800-473-3653)"
    hours: str = "Mon-Fri: 9 AM - 6 PM EST"
    location: str = "Based in USA, serving worldwide"
    contact_page: str = "/contact"


def format_contact_details(details: ContactDetails, brand: str) -> str:
    """
    Текст карточки контактов, которую рендерер прикрепляет к последнему ответу бота.
    """
    return "\n".join([
        f"Contact {brand} Support",
        f"Email: {details.email}",
        f"Phone: {details.phone}",
        f"Hours: {details.hours}",
        details.location,
        f"Contact page: {details.contact_page}",
    ])
