"""
Default landing page content

Shown whenever the store is not configured, unreachable, or a section has
not been saved yet.
"""

DEFAULT_BRANDING = {
    'brandName': 'Mulone Tech',
    'brandTagline': 'Smart digital solutions',
    'brandLogoUrl': '',
}

DEFAULT_HERO = {
    'badge': 'Technology agency for growing businesses',
    'title': 'We build smart digital solutions that move your brand forward faster.',
    'subtitle': ('Strategy, design and engineering in one team. We create websites, '
                 'internal platforms, consulting and security systems focused on '
                 'performance, trust and scale.'),
    'radar_eyebrow': 'Mulone Report',
    'radar_title': 'Digital growth radar',
    'radar_description': ('We track metrics, automations and weekly improvements to '
                          'keep your digital operation competitive.'),
    'cta_primary_label': 'I want a free assessment',
    'cta_primary_href': '#contact',
    'cta_secondary_label': 'See recent projects',
    'cta_secondary_href': '#projects',
}

DEFAULT_HERO_STATS = [
    {'value': '+120', 'label': 'Projects delivered'},
    {'value': '24h', 'label': 'Strategic support'},
    {'value': '98%', 'label': 'Client satisfaction'},
]

SERVICE_ICONS = ('globe', 'cpu', 'shield', 'camera', 'layers', 'sparkles')

DEFAULT_SERVICES = [
    {'icon': 'globe', 'title': 'Websites and platforms',
     'description': 'Corporate sites, landing pages and portals focused on performance, SEO and original design.'},
    {'icon': 'cpu', 'title': 'Strategic consulting',
     'description': 'Process mapping, automation, cloud and digital architecture to scale operations.'},
    {'icon': 'shield', 'title': 'Security systems',
     'description': 'Alarms, access control and networks with smart monitoring for critical environments.'},
    {'icon': 'camera', 'title': 'Smart monitoring',
     'description': 'Integrated cameras with analytics and real-time alerts for your team.'},
    {'icon': 'layers', 'title': 'Tailored products',
     'description': 'Custom digital solutions for the unique challenges of your company.'},
    {'icon': 'sparkles', 'title': 'Branding and experience',
     'description': 'Visual identity, UX and content aligned with your positioning and sales goals.'},
]

DEFAULT_SERVICES_SECTION = {
    'eyebrow': 'Services',
    'title': 'A complete studio to accelerate your business',
    'description': ('From strategy to launch, we deliver digital solutions with ongoing '
                    'support and real impact indicators.'),
}

DEFAULT_PROJECTS_SECTION = {
    'eyebrow': 'Projects',
    'title': 'Some recent deliveries with real impact',
    'description': 'Every project starts with strategy, performance and a unique visual story for your brand.',
}

DEFAULT_PROJECTS = [
    {'title': 'Corporate portal', 'tag': 'SaaS / B2B',
     'description': 'We restructured the digital presence with a focus on conversion and premium positioning.'},
    {'title': 'Monitoring app', 'tag': 'Security',
     'description': 'Real-time dashboard with critical alerts for distributed teams.'},
    {'title': 'Branding and website', 'tag': 'Retail',
     'description': 'New identity and e-commerce with smooth navigation and strategic content.'},
]

DEFAULT_TESTIMONIALS_SECTION = {
    'eyebrow': 'Testimonials',
    'title': 'Partners who trust Mulone Tech',
    'description': 'We focus on long-term relationships with measurable results.',
}

DEFAULT_TESTIMONIALS = [
    {'name': 'Carla Mendes', 'role': 'Operations Director',
     'quote': 'The team turned our challenge into a clear, scalable system. Operations got lighter.'},
    {'name': 'João Mateus', 'role': 'CEO, Grupo Nova',
     'quote': 'The website renewed our digital presence. Qualified leads went up in the first weeks.'},
    {'name': 'Yara Silva', 'role': 'Security Manager',
     'quote': 'The integrated solutions brought full visibility and reduced incidents.'},
]

# The contact form only accepts these needs
CONTACT_NEEDS = ('Consultative support', 'Free assessment', 'Tailored projects')

DEFAULT_CONTACT = {
    'eyebrow': "Let's talk",
    'title': 'Ready to accelerate your digital growth?',
    'description': 'Send us your need and we reply with a clear action plan within 48 hours.',
    'badges': list(CONTACT_NEEDS),
}

DEFAULT_PROFILE = {
    'display_name': 'Mulone Tech Team',
    'role': 'Leadership and strategic support',
    'bio': '',
    'avatar_url': '',
}
