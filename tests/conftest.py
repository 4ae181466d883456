"""Shared fixtures: a Star Wars schema and context factories."""

import pytest

from gql_stubgen.core.config import Configuration
from gql_stubgen.core.context import GenerationContext
from gql_stubgen.core.parser import SchemaParser

STARWARS_SDL = '''
"""Anything with an identity."""
interface Node {
  id: ID!
}

"A character in the saga"
interface Character implements Node {
  id: ID!
  name: String!
  friends(first: Int = 10, after: String): [Character]
}

type Human implements Node & Character {
  id: ID!
  name: String!
  friends(first: Int = 10, after: String): [Character]
  homePlanet: String
}

type Droid implements Node & Character {
  id: ID!
  name: String!
  friends(first: Int = 10, after: String): [Character]
  primaryFunction: String
}

type Starship {
  id: ID!
  length(unit: LengthUnit = METER): Float
}

union SearchResult = Human | Droid | Starship

enum Episode {
  "Released in 1977."
  NEWHOPE
  EMPIRE
  JEDI
}

enum LengthUnit {
  METER
  FOOT
}

input ReviewInput {
  stars: Int!
  commentary: String
  limit: Int = 10
}

"An ISO 8601 timestamp."
scalar DateTime

type Review {
  stars: Int!
  commentary: String
  createdAt: DateTime
}

type Query {
  hero(id: ID!): Character
  search(text: String!): [SearchResult!]!
  reviews(episode: Episode): [Review]
}

type Mutation {
  createReview(episode: Episode, review: ReviewInput!): Review
}

type Subscription {
  reviewAdded(episode: Episode): Review
}
'''


@pytest.fixture
def starwars_sdl():
    return STARWARS_SDL


@pytest.fixture
def starwars_schema():
    return SchemaParser.parse_sdl(STARWARS_SDL)


@pytest.fixture
def starwars_config():
    return Configuration(
        namespace="starwars",
        scalar_mapping={"DateTime": "datetime.datetime"},
    )


@pytest.fixture
def starwars_context(starwars_schema, starwars_config):
    return GenerationContext.create(starwars_schema, starwars_config)


@pytest.fixture
def make_context():
    """Factory building a context from SDL text or a SchemaModel."""

    def factory(schema, namespace="starwars", **settings):
        if isinstance(schema, str):
            schema = SchemaParser.parse_sdl(schema)
        return GenerationContext.create(
            schema, Configuration(namespace=namespace, **settings)
        )

    return factory
