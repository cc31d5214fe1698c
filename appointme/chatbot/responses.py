"""
Canned answers for the assistant and the prompt sent to the text generation
service. The canned table is ordered; first matching topic wins.
"""
import re

from appointme.chatbot.intents import Intent, classify, keywords, normalize

INTRODUCTION = (
    "**Hello! I'm AppointMe Assistant.**\n\n"
    "I'm here to help you with anything related to our home services platform. "
    "You can ask me about booking services, becoming a provider, payments, "
    "or any other questions!\n\nWhat can I help you with today?"
)

GREETING = (
    "Hello! Welcome to AppointMe, your trusted marketplace for home services in "
    "Bangladesh. How can I assist you today? You can ask me about booking services, "
    "becoming a provider, payments, or anything else related to our platform."
)

BOOKING = (
    "**How to Book a Service on AppointMe:**\n\n"
    "1. Browse our 200+ available services\n"
    "2. Select a service that fits your needs\n"
    "3. Choose a verified provider\n"
    "4. Pick your preferred date and time\n"
    "5. Complete secure payment\n"
    "6. Get instant confirmation!\n\n"
    "**Available Services:** Home Cleaning, AC Servicing, Electrical Works, Plumbing, "
    "Beauty & Grooming, Appliance Repair and more. Your user ID and booking details "
    "are automatically handled by our system."
)

PROVIDER = (
    "**Become an AppointMe Service Provider:**\n\n"
    "**Requirements:**\n"
    "- Valid credentials and documentation\n"
    "- Relevant skills and experience\n"
    "- Professional commitment\n\n"
    "**Process:**\n"
    "1. Submit your application with documents\n"
    "2. Admin team reviews your credentials\n"
    "3. Background verification process\n"
    "4. Get approval notification\n"
    "5. Set up your service profile\n"
    "6. Start receiving bookings!\n\n"
    "**Benefits:** Verified provider badge, steady income, flexible schedule, platform support."
)

PAYMENT = (
    "**AppointMe Payment System:**\n\n"
    "**Security Features:**\n"
    "- Encrypted payment gateway\n"
    "- Automatic status tracking\n"
    "- Multiple payment options\n"
    "- Secure transaction processing\n\n"
    "**Payment Process:**\n"
    "1. Select your service\n"
    "2. View transparent pricing\n"
    "3. Pay securely online\n"
    "4. Get instant confirmation\n"
    "5. Service provider gets notified\n\n"
    "**Refund Policy:** Full refunds available for cancelled bookings before confirmation."
)

SERVICES = (
    "**AppointMe Services in Dhaka:**\n\n"
    "**Popular Categories:**\n"
    "- Home Cleaning - Deep cleaning, regular maintenance\n"
    "- AC Servicing - Installation, repair, maintenance\n"
    "- Electrical Works - Wiring, repairs, installations\n"
    "- Plumbing - Pipe repairs, installations, maintenance\n"
    "- Beauty & Grooming - Home salon services\n"
    "- Appliance Repair - All home appliance fixes\n\n"
    "**Total:** 200+ different services available\n"
    "**Coverage:** All areas in Dhaka, Bangladesh\n"
    "**Quality:** Only verified and trusted providers"
)

ADMIN = (
    "**AppointMe Admin Functions:**\n\n"
    "**Provider Management:**\n"
    "- Review and approve applications\n"
    "- Verify provider credentials\n"
    "- Monitor service quality\n"
    "- Handle provider issues\n\n"
    "**Platform Operations:**\n"
    "- User management and support\n"
    "- Payment oversight\n"
    "- Quality assurance\n"
    "- Customer complaint resolution\n"
    "- Platform analytics and reporting\n\n"
    "Admins ensure all providers meet our quality standards before approval."
)

TECHNICAL = (
    "**Need Help with AppointMe?**\n\n"
    "**Common Solutions:**\n"
    "- **Login Issues:** Reset password or contact support\n"
    "- **Account Problems:** Check your profile settings\n"
    "- **App Issues:** Try refreshing or restart the app\n"
    "- **Payment Problems:** Verify card details or try a different method\n"
    "- **Booking Issues:** Contact customer support\n\n"
    "**24/7 Support Available:** live chat, email, phone and a help center with "
    "detailed guides.\n\nWhat specific issue can I help you with?"
)

TRACKING = (
    "**Track Your AppointMe Bookings:**\n\n"
    "**How to Check Status:**\n"
    "1. Login to your account\n"
    "2. Go to the 'Profile' section\n"
    "3. Click 'Booking History'\n"
    "4. View all your bookings with real-time status\n\n"
    "**Booking Statuses:**\n"
    "- Pending - Waiting for provider confirmation\n"
    "- Confirmed - Provider has accepted\n"
    "- Completed - Service finished successfully\n"
    "- Cancelled - Booking was cancelled\n\n"
    "You'll receive notifications for all status changes!"
)

CONTACT = (
    "**Contact AppointMe Support:**\n\n"
    "**24/7 Customer Support:**\n"
    "- Live Chat (fastest response)\n"
    "- Email Support\n"
    "- Phone Support\n"
    "- In-app messaging\n\n"
    "**Quick Help:** check our FAQ section, browse the help center, contact your "
    "service provider directly or report issues through the app.\n\n"
    "**Average Response Time:** Under 2 hours for most queries."
)

COVERAGE = (
    "**AppointMe Service Coverage:**\n\n"
    "**Primary Coverage:** Dhaka, Bangladesh (full citywide coverage)\n\n"
    "**Areas Served:** Dhanmondi, Gulshan, Banani, Uttara, Mirpur, Wari, Old Dhaka, "
    "Tejgaon, Mohammadpur, Bashundhara, Panthapath, Farmgate and all other areas in Dhaka!\n\n"
    "**Service Availability:** 7 days a week\n"
    "**Response Time:** Same-day or next-day service\n"
    "**Provider Network:** 500+ verified providers across the city"
)

ABOUT = (
    "**About the AppointMe Platform:**\n\n"
    "We're Bangladesh's most trusted home services marketplace, connecting customers "
    "with verified service providers.\n\n"
    "**Why Choose AppointMe?**\n"
    "- 200+ different services\n"
    "- Verified & trusted providers\n"
    "- Transparent pricing\n"
    "- Secure payments\n"
    "- 24/7 customer support\n"
    "- Easy booking process\n\n"
    "**Ask me about:** how to book services, becoming a provider, payment methods, "
    "service areas, tracking bookings or platform features."
)

DEFAULT_MENU = (
    "**AppointMe Assistant Here!**\n\n"
    "I can assist you with:\n\n"
    "- **Booking Services** - How to book, available services, pricing\n"
    "- **Becoming a Provider** - Application process, requirements\n"
    "- **Payments** - Payment methods, security, refunds\n"
    "- **Support** - Contact information, troubleshooting\n"
    "- **Tracking** - Booking status, history\n"
    "- **Services** - Available categories, coverage areas\n\n"
    "**Just ask me something like:**\n"
    '- "How do I book a service?"\n'
    '- "What services are available?"\n'
    '- "How to become a provider?"\n'
    '- "How does payment work?"\n\n'
    "What would you like to know?"
)

RESPONSE_RULES: list[tuple[re.Pattern, str]] = [
    (keywords("hello", "hi", "hey", "good morning", "good afternoon", "good evening", "greetings"),
     GREETING),
    (keywords("book", "booking", "appointment", "schedule", "reserve"), BOOKING),
    (keywords("provider", "become", "apply", "application", "join", "register", "verification"),
     PROVIDER),
    (keywords("payment", "pay", "money", "transaction", "refund", "billing", "charge", "cost", "price"),
     PAYMENT),
    (keywords("service", "services", "available", "offer", "what", "categories"), SERVICES),
    (keywords("admin", "approve", "reject", "manage", "dashboard", "review", "control"), ADMIN),
    (keywords("how", "help", "error", "problem", "issue", "support", "trouble", "login",
              "password", "account"), TECHNICAL),
    (keywords("track", "tracking", "status", "history", "order", "booking history"), TRACKING),
    (keywords("contact", "support", "call", "phone", "email", "reach"), CONTACT),
    (keywords("area", "areas", "coverage", "location", "dhaka", "bangladesh", "where", "available"),
     COVERAGE),
    (keywords("what", "tell", "about", "info", "information"), ABOUT),
]


def respond(message: str) -> str:
    text = normalize(message)
    if not text:
        return INTRODUCTION
    for pattern, response in RESPONSE_RULES:
        if pattern.search(text):
            return response
    return DEFAULT_MENU


QUICK_RESPONSES = [
    "How do I book a service?",
    "How to become a provider?",
    "What services are available?",
    "How does the payment system work?",
    "How do admins approve providers?",
    "What are the service charges?",
    "How to track my booking?",
    "How to contact support?",
    "What areas do you cover?",
    "How to cancel a booking?",
]

FAQS = [
    {
        "question": "How does AppointMe booking work?",
        "answer": "Simply browse our services, select a provider, choose your preferred time, "
                  "and book. Your user ID and booking time are automatically filled. Payment "
                  "is processed securely through our gateway.",
    },
    {
        "question": "How to become an AppointMe provider?",
        "answer": "Apply through our provider application form. Our admin team will review "
                  "your application, verify your credentials, and approve qualified providers. "
                  "Once approved, you can start offering services.",
    },
    {
        "question": "What services does AppointMe offer?",
        "answer": "We offer 200+ home services including Home Cleaning, AC Servicing, "
                  "Electrical Works, Plumbing, Beauty & Grooming, and Appliance Repair across "
                  "Dhaka, Bangladesh.",
    },
    {
        "question": "How secure are payments on AppointMe?",
        "answer": "We use secure payment gateways with automatic status tracking. All "
                  "transactions are encrypted and protected. Multiple payment options are "
                  "available for your convenience.",
    },
    {
        "question": "How do I track my booking?",
        "answer": "Log into your account and visit the Booking History page from your profile "
                  "menu. You can see all your bookings with real-time status updates.",
    },
]


PLATFORM_CONTEXT = """You are AppointMe Assistant, an AI helper for the AppointMe appointment platform.

ABOUT APPOINTME:
AppointMe is a trusted marketplace for home services in Dhaka, Bangladesh. It connects
customers with verified service providers for Home Cleaning, AC Servicing, Electrical
Works, Plumbing, Beauty & Grooming and Appliance Repair, with transparent pricing.

CUSTOMERS: sign up, browse services, book a provider's service with a preferred time,
pay through the secure gateway, track booking status (pending, confirmed, completed,
cancelled) and receive a notification for every change.

SERVICE PROVIDERS: apply with their real name and a credential document, wait for
admin approval, then list services and confirm, complete or cancel incoming bookings.
While a provider has an active booking, all of their services show as booked until
they mark everything available again.

ADMINS: review pending provider applications oldest first and approve or reject them;
applicants are notified of the decision and rejected applicants may reapply.

Please help users with questions about booking services, understanding the platform,
provider applications, admin processes and payments. Always be helpful, professional
and accurate about the platform."""

INTENT_FOCUS = {
    Intent.BOOKING: "SPECIAL FOCUS: The user is asking about booking services. Provide detailed "
                    "information about the booking process, available services, pricing, and how "
                    "the automatic system works.",
    Intent.PROVIDER: "SPECIAL FOCUS: The user is asking about becoming a provider or provider-related "
                     "topics. Focus on the application process, requirements, approval process, and "
                     "how providers can manage their services.",
    Intent.ADMIN: "SPECIAL FOCUS: The user is asking about admin functions. Explain how admins "
                  "review applications, manage the platform, and handle approvals/rejections.",
    Intent.PAYMENT: "SPECIAL FOCUS: The user is asking about payments. Provide information about the "
                    "payment system, security, automatic status tracking, and transaction process.",
    Intent.TECHNICAL: "SPECIAL FOCUS: The user has a technical question. Provide step-by-step "
                      "guidance and troubleshooting information.",
    Intent.GENERAL: "Provide a comprehensive and helpful response about AppointMe.",
}


def build_prompt(message: str) -> str:
    intent = classify(message)
    return (
        f"{PLATFORM_CONTEXT}\n\n{INTENT_FOCUS[intent]}"
        f"\n\nUser Question: {message}\n\nAppointMe Assistant Response:"
    )
