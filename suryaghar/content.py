"""
Static site content.

Hero, about, vacancies, requirements, urgency banner, process steps, FAQ,
default testimonials, navigation, footer and the floating contact
button. None of this touches the backend.
"""
from dataclasses import asdict, dataclass
from typing import Optional
from urllib.parse import quote

from suryaghar.core.config import Settings
from suryaghar.models.constants import State, values

WHATSAPP_GREETING = "नमस्ते, मुझे PM Surya Ghar योजना के बारे में जानकारी चाहिए"


def whatsapp_link(number: str, text: Optional[str] = WHATSAPP_GREETING) -> str:
    """wa.me deep link; a bare 10-digit number gets the 91 country code."""
    digits = "".join(ch for ch in number if ch.isdigit())
    if len(digits) == 10:
        digits = f"91{digits}"
    link = f"https://wa.me/{digits}"
    if text:
        link += f"?text={quote(text)}"
    return link


# ==================== Countdown ====================

@dataclass
class Countdown:
    """Cosmetic application-deadline timer on the hero banner."""
    days: int = 15
    hours: int = 12
    minutes: int = 30
    seconds: int = 45

    def tick(self) -> "Countdown":
        """One second down, borrowing from the next unit; stops at zero."""
        if self.seconds > 0:
            self.seconds -= 1
        elif self.minutes > 0:
            self.minutes, self.seconds = self.minutes - 1, 59
        elif self.hours > 0:
            self.hours, self.minutes, self.seconds = self.hours - 1, 59, 59
        elif self.days > 0:
            self.days, self.hours, self.minutes, self.seconds = self.days - 1, 23, 59, 59
        return self

    @property
    def finished(self) -> bool:
        return not (self.days or self.hours or self.minutes or self.seconds)

    def to_dict(self) -> dict:
        return asdict(self)


# ==================== Sections ====================

HERO = {
    "badge": "GOVERNMENT LINKED PROJECT",
    "headline": "State & District Level Government Project",
    "title": "PM Surya Ghar Muft Bijli Yojana",
    "subtitle": "Recruitment for Vendors 2026",
    "subtitle_hindi": "राज्य एवं जिला स्तर प्रोजेक्ट भर्ती 2026",
    "highlights": [
        {"value": "₹80,000", "label": "Salary Up To"},
        {"value": "6 States", "label": "Work in Your State"},
        {"value": "Limited", "label": "Vacancies"},
        {"value": "24/7", "label": "WhatsApp Support"},
    ],
    "deadline_label": "Application Deadline",
}

ABOUT_FEATURES = [
    {"title": "Government Initiative", "title_hindi": "सरकारी पहल"},
    {"title": "Direct Bank Subsidy", "title_hindi": "सीधे बैंक सब्सिडी"},
    {"title": "Official Portal Based Process", "title_hindi": "आधिकारिक पोर्टल प्रक्रिया"},
    {"title": "Loan Available @ 6.5%", "title_hindi": "6.5% पर ऋण उपलब्ध"},
]

VACANCIES = [
    {
        "title": "State Project Manager",
        "requirements": "Graduate + 5 Years Experience",
        "salary": "₹80,000",
        "ta": None,
    },
    {
        "title": "District Project Manager",
        "requirements": "Graduate + 2 Years Experience",
        "salary": "₹40,000",
        "ta": "+ ₹10,000 TA",
    },
    {
        "title": "Project Facilitator",
        "requirements": "Graduate",
        "salary": "₹27,000",
        "ta": "+ ₹3,000 TA",
    },
]

REQUIREMENTS = [
    {"title": "Bio Data", "description": "Updated resume/CV"},
    {"title": "Aadhaar Card", "description": "Government ID proof"},
    {"title": "Email ID", "description": "Active email address"},
    {"title": "Mobile Number", "description": "Valid contact number"},
    {"title": "Passport Photo", "description": "Recent photograph (white background)"},
    {"title": "Two Wheeler + License", "description": "Valid driving license"},
    {"title": "Android 5G Phone", "description": "Smartphone required"},
]

URGENCY = {
    "title": "Limited Vacancies Available!",
    "message": "Apply now before positions are filled. First come, first served basis.",
}

PROCESS_STEPS = [
    {"title": "Step 1: Apply", "description": "Fill the application form with all required documents"},
    {"title": "Step 2: Verification", "description": "Our team will verify your credentials and documents"},
    {"title": "Step 3: Interview", "description": "Shortlisted candidates will be called for interview"},
    {"title": "Step 4: Appointment", "description": "Selected candidates will receive appointment letter"},
]

FAQS = [
    {
        "question": "What is PM Surya Ghar Muft Bijli Yojana?",
        "answer": "PM Surya Ghar Muft Bijli Yojana is a government initiative to promote rooftop solar "
                  "installations with direct subsidy and loan support at 6.5% interest rate.",
    },
    {
        "question": "Which states are covered under this recruitment?",
        "answer": "This recruitment covers 6 states: Rajasthan, Andhra Pradesh, Telangana, Karnataka, "
                  "Tamil Nadu, and Kerala.",
    },
    {
        "question": "What are the minimum qualifications required?",
        "answer": "Minimum graduation is required for all positions. State Project Manager needs 5+ years "
                  "experience, District Manager needs 2+ years, and Project Facilitator needs fresh graduates.",
    },
    {
        "question": "Is there any application fee?",
        "answer": "No, there is no application fee. The application process is completely free of cost.",
    },
    {
        "question": "What is the salary structure?",
        "answer": "State Project Manager: ₹80,000, District Manager: ₹40,000 + ₹10,000 TA, "
                  "Project Facilitator: ₹27,000 + ₹3,000 TA.",
    },
    {
        "question": "How will I be contacted after applying?",
        "answer": "Shortlisted candidates will be contacted via email and phone within 7-10 working days. "
                  "You can also check status on WhatsApp.",
    },
    {
        "question": "Do I need to have a two-wheeler?",
        "answer": "Yes, having a two-wheeler with a valid driving license is mandatory as field visits "
                  "are part of the job role.",
    },
]

# Shown when the testimonials table is empty; also what the seed script loads.
DEFAULT_TESTIMONIALS = [
    {
        "name": "Rajesh Kumar",
        "state": "Rajasthan",
        "position": "District Project Manager",
        "image_url": "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=150&h=150&fit=crop",
        "review": "Great opportunity to work on a government project. The support from the team has been excellent.",
        "rating": 5,
    },
    {
        "name": "Priya Sharma",
        "state": "Karnataka",
        "position": "Project Facilitator",
        "image_url": "https://images.unsplash.com/photo-1494790108377-be9c29b29330?w=150&h=150&fit=crop",
        "review": "Professional work environment and timely salary. Happy to be part of clean energy mission.",
        "rating": 5,
    },
    {
        "name": "Amit Patel",
        "state": "Telangana",
        "position": "State Project Manager",
        "image_url": "https://images.unsplash.com/photo-1500648767791-00dcc994a43e?w=150&h=150&fit=crop",
        "review": "Challenging and rewarding role. Making real impact on sustainable energy adoption in our state.",
        "rating": 5,
    },
]


# ==================== Shell chrome ====================

NAV_LINKS = [
    {"label": "About", "href": "/#about"},
    {"label": "Vacancies", "href": "/#vacancies"},
    {"label": "Apply", "href": "/#apply"},
    {"label": "Legal", "href": "/#legal"},
    {"label": "Gallery", "href": "/#gallery"},
    {"label": "Jobs", "href": "/jobs"},
]


def shell(settings: Settings) -> dict:
    """Navigation, footer and floating contact button."""
    return {
        "brand": {"name": "Meri Pahal", "tagline": "Fast Help Artists Welfare"},
        "nav": NAV_LINKS,
        "apply_cta": {"label": "Apply Now / अभी आवेदन करें", "href": "/#apply"},
        "contact_button": {
            "label": "WhatsApp",
            "href": whatsapp_link(settings.whatsapp_number),
        },
        "footer": {
            "about": "Recruitment drive for the PM Surya Ghar Muft Bijli Yojana rooftop solar programme.",
            "states": values(State),
            "links": [
                {"label": "National Portal for Rooftop Solar", "href": settings.portal_url},
                {"label": "Job Portal", "href": "/jobs"},
                {"label": "Admin Login", "href": "/login"},
            ],
            "whatsapp": whatsapp_link(settings.whatsapp_number),
        },
    }


def home_static(settings: Settings) -> dict:
    return {
        "hero": {**HERO, "countdown": Countdown().to_dict()},
        "about": {"features": ABOUT_FEATURES, "portal_url": settings.portal_url},
        "vacancies": VACANCIES,
        "requirements": REQUIREMENTS,
        "urgency": URGENCY,
        "process": PROCESS_STEPS,
        "faq": FAQS,
    }
