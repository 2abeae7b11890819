"""Describes the Meal Remix domain. Centres around the `Recipe`.

There are three external collaborators:

- The recipe catalog (TheMealDB), a read-only json api.
- The chat completion service used to remix a recipe.
- A durable key-value slot holding the names of saved recipes.

None of them hold invariants we need to enforce, so each sits behind a thin
client that can be faked in tests.
"""
