# Module for single-pass text substitution helpers

import re


def replace_all(content, mapping):
    """
    Replaces every key of `mapping` found in `content` in one pass.

    Keys are tried longest first at each position and replacement text is
    never rescanned, so a generated replacement cannot match another key.
    """
    if not mapping:
        return content
    keys = sorted(mapping, key=len, reverse=True)
    pattern = re.compile('|'.join(re.escape(key) for key in keys))
    return pattern.sub(lambda m: mapping[m.group(0)], content)


def substitute_patterns(content, rules):
    """
    Applies ordered (pattern, replacement) rules in one synchronized pass.

    All patterns are matched against the original text. Where several could
    match at the same position, the earliest rule wins.
    """
    if not rules:
        return content
    combined = re.compile(
        '|'.join(f"(?P<r{i}>{pattern})" for i, (pattern, _) in enumerate(rules)),
        re.DOTALL,
    )
    replacements = {f"r{i}": replacement for i, (_, replacement) in enumerate(rules)}
    return combined.sub(lambda m: replacements[m.lastgroup], content)
