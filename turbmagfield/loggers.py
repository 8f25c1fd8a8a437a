"""
This module sets up the logging utilities to be used throughout
"""

import logging as log

turbmagfield_log = log.getLogger("turbmagfield")
turbmagfield_log.addHandler(log.NullHandler())


def equals_border_fprint(msg: str, loc: str = "", level: int = log.INFO) -> None:
    """
    Format log routine with = vertical delimiting. Specifically, logs
    in the form

    ```
    =================================
    [{loc}] -> {msg}
    =================================
    ```

    where the substring `[{loc}] -> ` is added only if loc is not empty.

    Parameters
    ----------
    msg
        The intended message
    loc
        A string to be printed between square brackets preceding the
        arrow. Intended to be used as some indication of where the
        call to this function is located. By default, the empty string.
    level
        Logging level of the record, by default ``logging.INFO``.
    """

    header = ""
    if loc != "":
        header = f"[{loc}] -> "

    turbmagfield_log.log(
        level,
        "\n=================================\n"
        f"{header}{msg}\n"
        "=================================",
    )


def simple_fprint(msg: str, loc: str = "", tabbed: bool = False, level: int = log.INFO) -> None:
    """
    Format log routine. Specifically, logs in the form

    ```
    {tab}[{loc}] -> msg
    ```

    Parameters
    ----------
    msg
        The intended message.
    loc
        A string to be printed between square brackets preceding the
        arrows. Intended to be used as some indication of where the
        call to this function is located. By default, the empty string.
    tabbed
        If true, prepends a tab's worth of white space (4 spaces).
        By default, False.
    level
        Logging level of the record, by default ``logging.INFO``.
    """

    header = "    " if tabbed else ""
    if loc != "":
        header += f"[{loc}] -> "

    turbmagfield_log.log(level, f"{header}{msg}")
