"""
Landing Page Content Models

Section tables (hero, services, projects, testimonials, contact, profile)
hold a single row with id=1; item tables are ordered by sort_order.
"""

from mulone_site.extensions import db


class HeroContent(db.Model):
    """Hero banner copy and call-to-action links"""
    __tablename__ = 'hero_content'

    id = db.Column(db.Integer, primary_key=True)
    badge = db.Column(db.Text)
    title = db.Column(db.Text)
    subtitle = db.Column(db.Text)
    radar_eyebrow = db.Column(db.Text)
    radar_title = db.Column(db.Text)
    radar_description = db.Column(db.Text)
    cta_primary_label = db.Column(db.Text)
    cta_primary_href = db.Column(db.Text)
    cta_secondary_label = db.Column(db.Text)
    cta_secondary_href = db.Column(db.Text)

    def __repr__(self):
        return f'<HeroContent {self.title!r}>'


class HeroStat(db.Model):
    """Headline figure shown under the hero"""
    __tablename__ = 'hero_stats'

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    value = db.Column(db.Text)
    label = db.Column(db.Text)
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    def __repr__(self):
        return f'<HeroStat {self.value} {self.label}>'


class _SectionHeader:
    eyebrow = db.Column(db.Text)
    title = db.Column(db.Text)
    description = db.Column(db.Text)

    def __repr__(self):
        return f'<{type(self).__name__} {self.title!r}>'


class ServicesSection(_SectionHeader, db.Model):
    __tablename__ = 'services_section'
    id = db.Column(db.Integer, primary_key=True)


class ProjectsSection(_SectionHeader, db.Model):
    __tablename__ = 'projects_section'
    id = db.Column(db.Integer, primary_key=True)


class TestimonialsSection(_SectionHeader, db.Model):
    __tablename__ = 'testimonials_section'
    id = db.Column(db.Integer, primary_key=True)


class Service(db.Model):
    """Service card"""
    __tablename__ = 'services'

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    icon = db.Column(db.String(32), default='globe')
    title = db.Column(db.Text)
    image_url = db.Column(db.Text)
    description = db.Column(db.Text)
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    def __repr__(self):
        return f'<Service {self.id} {self.title!r}>'


class Project(db.Model):
    """Portfolio project with an optional image gallery"""
    __tablename__ = 'projects'

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    title = db.Column(db.Text)
    tag = db.Column(db.Text)
    image_url = db.Column(db.Text)
    description = db.Column(db.Text)
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    images = db.relationship('ProjectImage', backref='project', lazy=True,
                             cascade='all, delete-orphan',
                             order_by='ProjectImage.sort_order')

    def __repr__(self):
        return f'<Project {self.id} {self.title!r}>'


class ProjectImage(db.Model):
    """Gallery image attached to a project"""
    __tablename__ = 'project_images'

    id = db.Column(db.Integer, primary_key=True)
    project_id = db.Column(db.Integer, db.ForeignKey('projects.id', ondelete='CASCADE'),
                           nullable=False, index=True)
    image_url = db.Column(db.Text, nullable=False)
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())

    def __repr__(self):
        return f'<ProjectImage {self.id} project:{self.project_id}>'


class Testimonial(db.Model):
    """Client quote"""
    __tablename__ = 'testimonials'

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.Text)
    role = db.Column(db.Text)
    quote = db.Column(db.Text)
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    def __repr__(self):
        return f'<Testimonial {self.id} {self.name!r}>'


class ContactSection(db.Model):
    """Contact block copy and its badges"""
    __tablename__ = 'contact_section'

    id = db.Column(db.Integer, primary_key=True)
    eyebrow = db.Column(db.Text)
    title = db.Column(db.Text)
    description = db.Column(db.Text)
    badges = db.Column(db.JSON)

    def __repr__(self):
        return f'<ContactSection {self.title!r}>'


class AdminProfile(db.Model):
    """Public profile highlighted on the landing page"""
    __tablename__ = 'admin_profile'

    id = db.Column(db.Integer, primary_key=True)
    display_name = db.Column(db.Text)
    role = db.Column(db.Text)
    bio = db.Column(db.Text)
    avatar_url = db.Column(db.Text)

    def __repr__(self):
        return f'<AdminProfile {self.display_name!r}>'
