"""Describes the CookBook domain. Centres around the `RecipeRepository`.

Why is this easy?

- Every page is a single read or write against two tables, `recipes` and
  `ingredients`.
- No invariants that need to be enforced beyond "ingredients point at a
  recipe", and creation order takes care of that.
- Recipes are never modified or deleted once written.

What is left is shaping queries from filter state and turning form drafts into
rows. The datastore is passed in everywhere, so it can be faked.

The recipe and its ingredients are two separate writes. If the second one
fails the recipe stays behind with no ingredients. Nobody has asked for that
to change yet.
"""
