"""
Prompt Templates - locate, extract and assert prompts.

The system prompt fixes the answer format; the user prompt carries the page
description and what is asked for.
"""

import json
from typing import Dict, Union

CHARACTERISTIC = (
    "You are a versatile professional in software UI design and testing. "
    "Your outstanding contributions will impact the user experience of billions of users."
)

CONTEXT_FORMAT_INTRO = """
The user will give you a screenshot and some of the texts on it. There may be some none-English characters (like Chinese) on it, indicating it's an non-English app. If some text is shown on screenshot but not introduced by the JSON description, use the information you see on screenshot."""

LOCATE_ELEMENT_SYSTEM = """
{characteristic}
{context_format_intro}

Based on the information you get, find the elements on the page that match the user's description.
Match by visible text, element role and position on the screenshot. Prefer the most specific
element (e.g. the icon rather than the whole toolbar).

Return in the following JSON format:
{{
  "elements": [ // Leave it an empty array when no element is found
    {{
      "id": "id of the element, like 123"
    }}
    // more ...
  ],
  "errors": [] // string[], error message if any
}}
"""

LOCATE_ELEMENT_USER = """
pageDescription:
=====================================
{page_description}
=====================================

Here is the item user want to find. Just go ahead:
=====================================
{{
  "description": "{target_element_description}",
  "multi": {multi}
}}
=====================================

{multi_hint}
"""

SINGLE_HINT = "Find exactly ONE element. If several match, return the most likely one."
MULTI_HINT = "Find one or more elements. Return every element that matches."


def system_prompt_to_locate_element() -> str:
    return LOCATE_ELEMENT_SYSTEM.format(
        characteristic=CHARACTERISTIC,
        context_format_intro=CONTEXT_FORMAT_INTRO,
    )


def find_element_prompt(
    page_description: str,
    target_element_description: str,
    multi: bool,
) -> str:
    """User turn text for a locate request."""
    escaped = target_element_description.replace("\\", "\\\\").replace('"', '\\"')
    return LOCATE_ELEMENT_USER.format(
        page_description=page_description,
        target_element_description=escaped,
        multi="true" if multi else "false",
        multi_hint=MULTI_HINT if multi else SINGLE_HINT,
    )


EXTRACT_DATA_SYSTEM = """
{characteristic}
The user will give you a screenshot and the contents of it. There may be some none-English characters (like Chinese) on it, indicating it's an non-English app.

You have the following skills:

skill name: extract_data_from_UI
related input: DATA_DEMAND
skill content:
* User will give you some data requirements in DATA_DEMAND. Consider the UI context, follow the user's instructions, and provide comprehensive data accordingly.
* There may be some special commands in DATA_DEMAND, please pay extra attention
  - LOCATE_ONE_ELEMENT and LOCATE_ONE_OR_MORE_ELEMENTS: if you see a description that mentions one of these keywords, the user wants to locate elements that meet the description.

Return them as prefix + the id / comma-separated ids, for example: LOCATE_ONE_ELEMENT/1 , LOCATE_ONE_OR_MORE_ELEMENTS/1,2,3 . If not found, keep the prefix and leave the suffix empty, like LOCATE_ONE_ELEMENT/ .

Return in the following JSON format:
{{
  "language": "en", // "en" or "zh", the language of the page. Use the same language to describe section name, description, and similar fields.
  "data": any, // the extracted data from extract_data_from_UI skill. Make sure both the value and scheme meet the DATA_DEMAND.
  "errors": [] // string[], error message if any
}}
"""

EXTRACT_DATA_USER = """
pageDescription: {page_description}

Use your extract_data_from_UI skill to find the following data, placing it in the `data` field
DATA_DEMAND start:
=====================================
{data_keys}

{data_query}
=====================================
DATA_DEMAND ends.
"""

ASSERT_SYSTEM = """
{characteristic}
User will give an assertion, and some information about the page. Based on the information you get, tell whether the assertion is truthy.

Return in the following JSON format:
{{
  "thought": string, // the thought of the assertion. Should be in the same language as the assertion.
  "pass": true // true or false, whether the assertion is truthy
}}
"""

ASSERT_USER = """
Here is the description of the assertion. Just go ahead:
=====================================
{assertion}
=====================================
"""


def system_prompt_to_extract() -> str:
    return EXTRACT_DATA_SYSTEM.format(characteristic=CHARACTERISTIC)


def extract_data_prompt(page_description: str, data_query: Union[str, Dict[str, str]]) -> str:
    """
    User turn text for an extraction request.

    A string query is passed as-is. A mapping of key to description asks for
    an object with exactly those keys.
    """
    if isinstance(data_query, str):
        data_keys = ""
        query_text = data_query
    else:
        data_keys = f"return in key-value style object, keys are {','.join(data_query)}"
        query_text = json.dumps(data_query, indent=2, ensure_ascii=False)
    return EXTRACT_DATA_USER.format(
        page_description=page_description,
        data_keys=data_keys,
        data_query=query_text,
    )


def system_prompt_to_assert() -> str:
    return ASSERT_SYSTEM.format(characteristic=CHARACTERISTIC)


def assert_prompt(assertion: str) -> str:
    return ASSERT_USER.format(assertion=assertion)
