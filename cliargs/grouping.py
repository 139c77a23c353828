"""
cliargs grouping: reshape a flat output into group buckets.

When at least one definition declares a group, parse() returns

    {
        "_all": {...every value...},
        "<group>": {...values of definitions in <group>...},
        "_none": {...values of definitions without a group...},
    }

A definition listed in several groups shows its value in each of them. Only
definitions with a value in the output are copied, and buckets that would be
empty are left out ("_all" is always present).
"""

ALL = "_all"
NONE = "_none"


def groupoutput(definitions, output, /):
    """
    Group `output` according to `definitions`, or return it unchanged when
    no definition is grouped.
    """
    if not definitions.isgrouped():
        return output

    grouped = {ALL: output}

    for definition in definitions.wheregrouped():
        if definition.name not in output:
            continue
        for group in definition.group:
            grouped.setdefault(group, {})[definition.name] = output[definition.name]

    for definition in definitions.wherenotgrouped():
        if definition.name in output:
            grouped.setdefault(NONE, {})[definition.name] = output[definition.name]

    return grouped


__all__ = (
    "ALL",
    "NONE",
    "groupoutput",
)
