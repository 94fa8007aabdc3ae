"""
Demo: Collect a few submissions for the example survey and print the results.
"""

import sys

from sfm.aggregation import RatingResult, aggregate_results
from sfm.config import load_config
from sfm.examples import build_example_feedback_survey
from sfm.logs import setup_logging
from sfm.responses import init_responses, is_submittable, set_answer
from sfm.serialization import results_to_json, survey_to_yaml


def print_report(results):
    """Pretty-print SurveyResults."""
    print()
    print("=" * 70)
    print("SURVEY RESULTS")
    print("=" * 70)

    for item in results.results:
        print()
        print(f"📋 {item.question}")
        if isinstance(item, RatingResult):
            average = f"{item.average:.2f}" if item.average is not None else "n/a"
            print(f"  Average rating:        {average}")
            for value, count in item.distribution.items():
                print(f"    {value}: {'#' * count} ({count})")
        else:
            for answer in item.answers:
                print(f"  - {answer}")
    print()

    if results.errors:
        print("⚠️  SKIPPED RESPONSES")
        for i, error in enumerate(results.errors, 1):
            print(f"  {i}. {error}")
        print()


if __name__ == "__main__":
    config = load_config(sys.argv[1] if len(sys.argv) > 1 else None)
    setup_logging(config.log_level)

    survey = build_example_feedback_survey()
    print(survey_to_yaml(survey))

    submitted = []
    for content, instructor, comment in [("5", "4", "More exercises"), ("3", "4", ""), ("4", "5", "Great pace")]:
        responses = init_responses(survey)
        for question, answer in zip(survey.questions, (content, instructor, comment)):
            responses = set_answer(responses, question.id, answer)
        if is_submittable(survey, responses, config):
            submitted.extend(responses)

    results = aggregate_results(survey, submitted)
    print_report(results)
    print(results_to_json(results))
