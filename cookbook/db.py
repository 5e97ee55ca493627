from databases import Database


CREATE_RECIPES_TABLE = """
CREATE TABLE IF NOT EXISTS recipes (
    id VARCHAR(64) PRIMARY KEY,
    title VARCHAR(256) NOT NULL,
    title_search VARCHAR(256) NOT NULL,
    description TEXT NOT NULL,
    instructions TEXT NOT NULL,
    cooking_time INTEGER NOT NULL CHECK (cooking_time >= 1),
    servings INTEGER NOT NULL CHECK (servings >= 1),
    difficulty VARCHAR(16) NOT NULL CHECK (difficulty IN ('easy', 'medium', 'hard')),
    image_url VARCHAR(2048),
    calories REAL NOT NULL,
    protein REAL NOT NULL,
    carbs REAL NOT NULL,
    fat REAL NOT NULL
)
"""


CREATE_INGREDIENTS_TABLE = """
CREATE TABLE IF NOT EXISTS ingredients (
    id VARCHAR(64) PRIMARY KEY,
    recipe_id VARCHAR(64) NOT NULL REFERENCES recipes (id),
    name VARCHAR(256) NOT NULL,
    amount REAL NOT NULL CHECK (amount >= 0),
    unit VARCHAR(64) NOT NULL
)
"""


CREATE_INGREDIENTS_INDEX = """
CREATE INDEX IF NOT EXISTS ingredients_recipe_id ON ingredients (recipe_id)
"""


def database_factory(url: str) -> Database:
    return Database(url)


async def create_db(db: Database) -> None:
    for query in (
        CREATE_RECIPES_TABLE,
        CREATE_INGREDIENTS_TABLE,
        CREATE_INGREDIENTS_INDEX,
    ):
        await db.execute(query=query)  # pyright: ignore[reportUnknownMemberType]
