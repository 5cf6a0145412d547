"""
Demo catalogue loaded into an empty database at startup.

Showcase products are already verified and carry verification ids in the
same AUTH- format the workflow issues.
"""
from decimal import Decimal
import logging

from sqlalchemy.orm import Session

from artisan_alley.core.config import settings
from artisan_alley.db.models import AuthenticityStatus, Category, Product, User
from artisan_alley.security.passwords import hash_password
from artisan_alley.services.ai.authenticity import new_verification_id

logger = logging.getLogger(__name__)

UNSPLASH = "https://images.unsplash.com/photo-{}?ixlib=rb-4.0.3&auto=format&fit=crop&w={}&h={}"

CATEGORIES = [
    ("Paintings", "Original oil, acrylic, and watercolor paintings", "paintings"),
    ("Sculptures", "Handcrafted sculptures in various materials", "sculptures"),
    ("Crafts", "Unique handmade crafts and decorative items", "crafts"),
    ("Photography", "Fine art photography prints", "photography"),
    ("Digital Art", "Digital artwork and NFTs", "digital-art"),
    ("Jewelry", "Handcrafted jewelry and accessories", "jewelry"),
]

ADMIN = {"name": "Admin User", "email": "admin@artisanalley.com"}

ARTISTS = [
    {
        "name": "Sarthak Jadhav",
        "email": "sarthak@artisanalley.com",
        "bio": "Traditional Warli art specialist from Maharashtra creating modern interpretations of ancient tribal art forms",
        "specialty": "Warli Paintings & Contemporary Art",
        "location": "Pune, Maharashtra",
        "avatar": "1507003211169-0a1dd7228f2d",
    },
    {
        "name": "Aditya Thete",
        "email": "aditya@artisanalley.com",
        "bio": "Contemporary sculptor working with traditional Indian materials like sandalwood and marble",
        "specialty": "Traditional Indian Sculptures",
        "location": "Mumbai, Maharashtra",
        "avatar": "1472099645785-5658abf4ff4e",
    },
    {
        "name": "Abhishek Patade",
        "email": "abhishek@artisanalley.com",
        "bio": "Digital artist blending traditional Madhubani art with modern digital techniques",
        "specialty": "Digital Madhubani Art",
        "location": "Nagpur, Maharashtra",
        "avatar": "1500648767791-00dcc994a43e",
    },
    {
        "name": "Shubham Pagar",
        "email": "shubham@artisanalley.com",
        "bio": "Master craftsman specializing in traditional Kolhapuri leather goods and contemporary accessories",
        "specialty": "Leather Crafts & Accessories",
        "location": "Kolhapur, Maharashtra",
        "avatar": "1519345182560-3f2917c472ef",
    },
    {
        "name": "Sakshi Peharkar",
        "email": "sakshi@artisanalley.com",
        "bio": "Jewelry designer creating exquisite pieces inspired by traditional Maharashtrian designs",
        "specialty": "Traditional Indian Jewelry",
        "location": "Aurangabad, Maharashtra",
        "avatar": "1438761681033-6461ffad8d80",
    },
]

PRODUCTS = [
    {
        "artist": "sarthak@artisanalley.com",
        "category": "paintings",
        "title": "Traditional Warli Village Life",
        "description": (
            "Authentic Warli painting depicting the harmonious village life with traditional tribal motifs. "
            "Hand-painted using natural pigments on handmade paper, celebrating the rich cultural heritage of Maharashtra."
        ),
        "price": "15999.00",
        "stock": 1,
        "image": "1578662996442-48f60103fc96",
        "story": (
            "Inspired by the ancestral wisdom of Warli tribes, this piece tells the story of community, harvest, "
            "and celebration in rural Maharashtra."
        ),
        "score": "99.50",
        "dimensions": '18" × 24"',
        "medium": "Natural Pigments on Handmade Paper",
        "style": "Traditional Warli",
    },
    {
        "artist": "aditya@artisanalley.com",
        "category": "sculptures",
        "title": "Ganesha Marble Sculpture",
        "description": (
            "Exquisite Lord Ganesha sculpture carved from premium Makrana marble with intricate traditional motifs. "
            "Each detail is hand-carved with devotion and artistic mastery."
        ),
        "price": "45999.00",
        "stock": 1,
        "image": "1578662996442-48f60103fc96",
        "story": (
            "Carved during the auspicious month of Bhadrapada, this sculpture embodies the divine energy and "
            "blessings of Lord Ganesha for prosperity and wisdom."
        ),
        "score": "98.80",
        "dimensions": '12" × 8" × 6"',
        "medium": "Makrana Marble",
        "style": "Traditional Indian",
    },
    {
        "artist": "abhishek@artisanalley.com",
        "category": "paintings",
        "title": "Digital Madhubani Fish",
        "description": (
            "Contemporary digital interpretation of traditional Madhubani fish motifs, symbolizing fertility and "
            "prosperity. Printed on premium canvas with archival inks."
        ),
        "price": "8999.00",
        "stock": 3,
        "image": "1541961017774-22349e4a1262",
        "story": (
            "Blending ancient Mithila art traditions with modern digital techniques, this piece bridges generations "
            "of artistic expression."
        ),
        "score": "97.20",
        "dimensions": '16" × 20"',
        "medium": "Digital Art on Canvas",
        "style": "Digital Madhubani",
    },
    {
        "artist": "shubham@artisanalley.com",
        "category": "crafts",
        "title": "Kolhapuri Leather Handbag",
        "description": (
            "Handcrafted premium leather handbag using traditional Kolhapuri techniques. Features intricate embossed "
            "patterns and durable brass fittings."
        ),
        "price": "12999.00",
        "stock": 2,
        "image": "1553062407-98eeb64c6a62",
        "story": (
            "Crafted using age-old Kolhapuri leather techniques passed down through generations, each bag tells a "
            "story of craftsmanship and heritage."
        ),
        "score": "99.10",
        "dimensions": '14" × 10" × 4"',
        "medium": "Premium Leather, Brass",
        "style": "Traditional Kolhapuri",
    },
    {
        "artist": "sakshi@artisanalley.com",
        "category": "jewelry",
        "title": "Maharashtrian Nath Jewelry",
        "description": (
            "Exquisite traditional nose ring (Nath) inspired by Maharashtrian bridal jewelry. Handcrafted in sterling "
            "silver with intricate filigree work and kundan stones."
        ),
        "price": "25999.00",
        "stock": 1,
        "image": "1515562141207-7a88fb7ce338",
        "story": (
            "This piece embodies the grandeur of Maharashtrian bridal tradition, where the Nath symbolizes married "
            "bliss and cultural pride."
        ),
        "score": "99.80",
        "dimensions": '3" diameter (adjustable)',
        "medium": "Sterling Silver, Kundan, Pearls",
        "style": "Traditional Maharashtrian",
    },
    {
        "artist": "sarthak@artisanalley.com",
        "category": "paintings",
        "title": "Contemporary Warli on Canvas",
        "description": (
            "Modern interpretation of Warli art on large canvas, depicting urban-rural harmony through traditional "
            "motifs and contemporary colors."
        ),
        "price": "28999.00",
        "stock": 1,
        "image": "1578662996442-48f60103fc96",
        "story": (
            "This artwork bridges traditional Warli storytelling with contemporary urban experiences, showing how "
            "ancient wisdom adapts to modern life."
        ),
        "score": "98.90",
        "dimensions": '24" × 36"',
        "medium": "Acrylic on Canvas",
        "style": "Contemporary Warli",
    },
]


def seed_demo_data(db: Session) -> bool:
    """
    Load the demo catalogue when the database holds no users.

    Returns:
        True if data was inserted, False if the database was already populated.
    """
    if db.query(User).first() is not None:
        logger.info("Database already populated, skipping demo seed")
        return False

    categories = {}
    for name, description, slug in CATEGORIES:
        categories[slug] = Category(name=name, description=description, slug=slug)
    db.add_all(categories.values())

    # One hash shared by every demo account
    password_hash = hash_password(settings.DEMO_PASSWORD)

    db.add(User(role="admin", verified_status=True, email_verified=True, password_hash=password_hash, **ADMIN))

    artists = {}
    for artist in ARTISTS:
        artists[artist["email"]] = User(
            name=artist["name"],
            email=artist["email"],
            password_hash=password_hash,
            role="artist",
            verified_status=True,
            email_verified=True,
            artist_portfolio={
                "bio": artist["bio"],
                "specialty": artist["specialty"],
                "location": artist["location"],
                "avatar": UNSPLASH.format(artist["avatar"], 120, 120),
            },
        )
    db.add_all(artists.values())

    for item in PRODUCTS:
        db.add(Product(
            artist=artists[item["artist"]],
            category=categories[item["category"]],
            title=item["title"],
            description=item["description"],
            price=Decimal(item["price"]),
            stock=item["stock"],
            images=[UNSPLASH.format(item["image"], 600, 600)],
            story=item["story"],
            dimensions=item["dimensions"],
            medium=item["medium"],
            year=2024,
            style=item["style"],
            authenticity_status=AuthenticityStatus.VERIFIED.value,
            authenticity_score=Decimal(item["score"]),
            verification_id=new_verification_id(),
        ))

    try:
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to seed demo data: {str(e)}", exc_info=True)
        raise

    logger.info(f"Seeded {len(categories)} categories, {len(artists)} artists and {len(PRODUCTS)} products")
    return True
