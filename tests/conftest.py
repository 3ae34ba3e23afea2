LANGUAGE_CASES = [
    ("a", ["a"], ["", "b", "aa"]),
    ("ab", ["ab"], ["a", "b", "ba", "abb"]),
    ("a|b", ["a", "b"], ["", "ab"]),
    ("a*", ["", "a", "aaaa"], ["b", "ab"]),
    ("(a*)*", ["", "a", "aaa"], ["b"]),
    ("(a|b)*abb", ["abb", "aabb", "babb", "abababb"], ["", "ab", "abba"]),
    ("a(b|c)*d", ["ad", "abd", "acbcd"], ["a", "abc", "bd"]),
]


def pytest_generate_tests(metafunc):
    if {"regex", "accepted", "rejected"} <= set(metafunc.fixturenames):
        metafunc.parametrize("regex, accepted, rejected", LANGUAGE_CASES)
