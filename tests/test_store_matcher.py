import pytest

from shiftboard.utils.store_matcher import StoreMatcher, levenshtein_distance, similarity


def business(id, name, address, phone=None, rating=4.5, review_count=120):
    return {
        'id': id,
        'name': name,
        'location': {'display_address': [address]},
        'phone': phone,
        'rating': rating,
        'review_count': review_count,
        'url': f'https://www.yelp.com/biz/{id}',
    }


@pytest.mark.parametrize('a,b,expected', [
    ('kitten', 'sitting', 3),
    ('', 'abc', 3),
    ('same', 'same', 0),
])
def test_levenshtein_distance(a, b, expected):
    assert levenshtein_distance(a, b) == expected


def test_similarity_bounds():
    assert similarity('Joe Burger', 'Joe Burger') == 1.0
    assert similarity('', '') == 1.0
    assert similarity('JOE', 'joe') == 1.0
    assert similarity('abc', 'xyz') == 0.0


def test_exact_match_with_phone_scores_above_one():
    matcher = StoreMatcher("Joe's Burgers", '12 Oak St, Springfield', '(555) 123-4567')
    candidate = business('joes-burgers', "Joe's Burgers", '12 Oak St, Springfield', phone='+1555123-4567')

    # +1 prefix means digits differ, so only name, address and exact-name bonus apply
    assert matcher.score(candidate) == pytest.approx(1.0)

    candidate['phone'] = '555.123.4567'
    assert matcher.score(candidate) == pytest.approx(1.2)

    match = matcher.find_best_match([candidate])
    assert match.business_id == 'joes-burgers'
    assert match.rating == 4.5
    assert match.review_count == 120
    assert match.match_score >= 1.0


def test_weak_candidates_are_rejected():
    matcher = StoreMatcher("Joe's Burgers", '12 Oak St, Springfield')
    candidates = [business('sushi', 'Tokyo Sushi Palace', '900 Harbor Blvd, Shelbyville')]

    assert matcher.find_best_match(candidates) is None
    assert matcher.find_best_match([]) is None


def test_first_candidate_wins_ties():
    matcher = StoreMatcher('Taco Town', '5 Elm St')
    first = business('first', 'Taco Town', '5 Elm St')
    second = business('second', 'Taco Town', '5 Elm St')

    assert matcher.find_best_match([first, second]).business_id == 'first'


def test_missing_phone_never_earns_bonus():
    matcher = StoreMatcher('Taco Town', '5 Elm St', None)
    candidate = business('t', 'Taco Town', '5 Elm St', phone=None)
    assert matcher.score(candidate) == pytest.approx(1.0)
