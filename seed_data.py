from sqlmodel import Session, select
from storefront.db.session import engine, create_db_and_tables
from storefront.models import Category, Product, User, UserRole
from storefront.services.auth import AuthService

def seed():
    print("Creating database and tables...")
    create_db_and_tables()

    with Session(engine) as session:
        # Check if products already exist to avoid duplicates
        existing_products = session.exec(select(Product)).all()
        if existing_products:
            print(f"Database already contains {len(existing_products)} products. Skipping seed.")
            return

        print("Seeding catalog...")
        electronics = Category(name="Electronics", description="Gadgets and accessories")
        kitchen = Category(name="Home & Kitchen", description="Cookware and appliances")
        session.add(electronics)
        session.add(kitchen)
        session.commit()

        products = [
            Product(
                name="Wireless Headphones",
                description="Noise-cancelling over-ear headphones.",
                price=129.99,
                stock=25,
                category_id=electronics.id
            ),
            Product(
                name="USB-C Charger",
                description="65W fast charger with two ports.",
                price=39.50,
                stock=100,
                category_id=electronics.id
            ),
            Product(
                name="Chef's Knife",
                description="8-inch stainless steel chef's knife.",
                price=54.00,
                stock=40,
                category_id=kitchen.id
            ),
            Product(
                name="Cast Iron Skillet",
                description="Pre-seasoned 12-inch skillet.",
                price=32.25,
                stock=60,
                category_id=kitchen.id
            ),
        ]

        for product in products:
            session.add(product)
        session.commit()

        if not session.exec(select(User).where(User.role == UserRole.ADMIN)).first():
            AuthService(session).register_user("Store Admin", "admin@storefront.local", "changeme123", role=UserRole.ADMIN)
            print("Created admin user admin@storefront.local (password: changeme123)")

        print(f"Successfully seeded {len(products)} products!")

if __name__ == "__main__":
    seed()
