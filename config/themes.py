# Public profile theme presets and profession defaults

THEME_PRESETS = {
    "midnight": {
        "name": "Midnight",
        "accent": "#8b5cf6",
        "accent_light": "#a78bfa",
        "accent_dark": "#7c3aed",
        "gradient": "from-violet-600 to-purple-700",
        "bg_primary": "#0a0a0a",
        "bg_secondary": "#111111",
        "text_primary": "#ffffff",
        "text_secondary": "#a1a1aa",
    },
    "ocean": {
        "name": "Ocean",
        "accent": "#0ea5e9",
        "accent_light": "#38bdf8",
        "accent_dark": "#0284c7",
        "gradient": "from-cyan-500 to-blue-600",
        "bg_primary": "#0c1222",
        "bg_secondary": "#1e293b",
        "text_primary": "#f8fafc",
        "text_secondary": "#94a3b8",
    },
    "sunset": {
        "name": "Sunset",
        "accent": "#f97316",
        "accent_light": "#fb923c",
        "accent_dark": "#ea580c",
        "gradient": "from-orange-500 to-rose-600",
        "bg_primary": "#18181b",
        "bg_secondary": "#27272a",
        "text_primary": "#fafafa",
        "text_secondary": "#a1a1aa",
    },
    "forest": {
        "name": "Forest",
        "accent": "#10b981",
        "accent_light": "#34d399",
        "accent_dark": "#059669",
        "gradient": "from-emerald-500 to-teal-600",
        "bg_primary": "#0a0f0d",
        "bg_secondary": "#1a2421",
        "text_primary": "#f0fdf4",
        "text_secondary": "#86efac",
    },
    "minimal": {
        "name": "Minimal",
        "accent": "#18181b",
        "accent_light": "#3f3f46",
        "accent_dark": "#09090b",
        "gradient": "from-zinc-800 to-zinc-900",
        "bg_primary": "#fafafa",
        "bg_secondary": "#f4f4f5",
        "text_primary": "#18181b",
        "text_secondary": "#71717a",
    },
    "neon": {
        "name": "Neon",
        "accent": "#d946ef",
        "accent_light": "#e879f9",
        "accent_dark": "#c026d3",
        "gradient": "from-fuchsia-500 to-pink-600",
        "bg_primary": "#09090b",
        "bg_secondary": "#18181b",
        "text_primary": "#fafafa",
        "text_secondary": "#a1a1aa",
    },
    "professional": {
        "name": "Professional",
        "accent": "#eab308",
        "accent_light": "#facc15",
        "accent_dark": "#ca8a04",
        "gradient": "from-amber-500 to-yellow-600",
        "bg_primary": "#0f172a",
        "bg_secondary": "#1e293b",
        "text_primary": "#f8fafc",
        "text_secondary": "#cbd5e1",
    },
    "custom": {
        "name": "Custom",
        "accent": "#8b5cf6",
        "accent_light": "#a78bfa",
        "accent_dark": "#7c3aed",
        "gradient": "from-violet-600 to-purple-700",
        "bg_primary": "#0a0a0a",
        "bg_secondary": "#111111",
        "text_primary": "#ffffff",
        "text_secondary": "#a1a1aa",
    },
}

PROFESSION_THEMES = {
    "ceo": "professional",
    "doctor": "forest",
    "lawyer": "midnight",
    "realtor": "ocean",
    "influencer": "neon",
    "designer": "midnight",
    "consultant": "ocean",
    "sales": "sunset",
    "entrepreneur": "professional",
    "musician": "neon",
    "photographer": "midnight",
    "coach": "forest",
    "teacher": "ocean",
    "student": "minimal",
    "freelancer": "sunset",
    "other": "midnight",
}

PROFESSION_LABELS = {
    "ceo": "CEO / Executive",
    "doctor": "Doctor / Healthcare",
    "lawyer": "Lawyer / Legal",
    "realtor": "Real Estate Agent",
    "influencer": "Content Creator",
    "designer": "Designer / Creative",
    "consultant": "Consultant",
    "sales": "Sales Professional",
    "entrepreneur": "Entrepreneur",
    "musician": "Musician / Artist",
    "photographer": "Photographer",
    "coach": "Coach / Mentor",
    "teacher": "Teacher / Educator",
    "student": "Student",
    "freelancer": "Freelancer",
    "other": "Other",
}

# Studio materials offered in the funnel
MATERIALS = {
    "metal": "Matte Black Metal",
    "pvc": "Premium PVC",
    "wood": "Eco Walnut",
}

# Checkout price per material (INR, free shipping)
MATERIAL_PRICES = {
    "metal": 999,
    "pvc": 599,
    "wood": 799,
}
