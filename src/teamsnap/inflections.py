"""Naming rules for relations and resource types"""
import inflection

__all__ = ["singularize", "classify", "camelize", "is_singular"]

_IRREGULAR_SINGULARS = {
    "broadcast_sms": "broadcast_sms",
    "broadcast_smses": "broadcast_sms",
    "member_preferences": "member_preferences",
    "members_preferences": "member_preferences",
    "opponent_results": "opponent_results",
    "opponents_results": "opponent_results",
    "team_preferences": "team_preferences",
    "teams_preferences": "team_preferences",
    "team_results": "team_results",
    "teams_results": "team_results",
}
"""relations which are their own singular, or pluralize their first word"""


def singularize(word):
    """the singular form of a relation name"""
    try:
        return _IRREGULAR_SINGULARS[word]
    except KeyError:
        return inflection.singularize(word)


def camelize(word):
    return inflection.camelize(word, True)


def classify(rel):
    """the resource type name for a relation, e.g. ``Team`` for ``teams``"""
    return camelize(singularize(rel))


def is_singular(rel):
    """whether a relation names a single related entity"""
    return rel == singularize(rel)
