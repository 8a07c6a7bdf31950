import unittest

from wrapped import patterns
from wrapped.models import PatternAnalysis

from fixtures import make_assistant, make_dataset, make_user, text, tool


class PatternLibraryTests(unittest.TestCase):
    def test_every_category_has_patterns(self) -> None:
        categories = {p.category for p in patterns.USER_PATTERNS}

        self.assertEqual(categories, set(patterns.STYLE_CATEGORIES))
        self.assertEqual(len(patterns.CLAUDE_PHRASES), 8)

    def test_keys_are_unique_within_a_category(self) -> None:
        seen = set()
        for p in patterns.USER_PATTERNS:
            self.assertNotIn((p.category, p.key), seen)
            seen.add((p.category, p.key))


class AnalyzePatternsTests(unittest.TestCase):
    def test_empty_dataset_has_zeroed_style_map(self) -> None:
        result = patterns.analyze_patterns(make_dataset())

        self.assertEqual(result.longest_prompt.length, 0)
        self.assertEqual(result.shortest_prompt.text, "")
        self.assertEqual(result.shortest_prompt.length, 0)
        self.assertEqual(result.user_style["yelling"]["all_caps"], 0)
        self.assertEqual(set(result.user_style), set(patterns.STYLE_CATEGORIES))

    def test_yelling_patterns(self) -> None:
        dataset = make_dataset(user_entries=[
            make_user("WHY isn't this working?? FIX IT!! I already told you", uuid="u1"),
        ])

        result = patterns.analyze_patterns(dataset)
        yelling = result.user_style["yelling"]

        self.assertEqual(yelling["multi_exclaim"], 1)
        self.assertEqual(yelling["multi_question"], 1)
        # "WHY" is 3 letters, "FIX"/"IT" too short
        self.assertEqual(yelling["all_caps"], 0)
        self.assertEqual(yelling["frustration_words"], 1)
        self.assertEqual(yelling["why_not"], 1)
        self.assertEqual(yelling["already_told"], 1)
        self.assertEqual(result.user_frustration, yelling)

    def test_polite_and_curious_patterns(self) -> None:
        dataset = make_dataset(user_entries=[
            make_user("Please explain how this works, thanks! What if we cache it?", uuid="u1"),
        ])

        result = patterns.analyze_patterns(dataset)

        self.assertEqual(result.user_style["polite"]["please"], 1)
        self.assertEqual(result.user_style["polite"]["thanks"], 1)
        self.assertEqual(result.user_style["curious"]["how"], 1)
        self.assertEqual(result.user_style["curious"]["what_if"], 1)
        self.assertEqual(result.question_count, 1)
        self.assertEqual(result.exclamation_count, 1)

    def test_word_boundaries_are_ascii(self) -> None:
        dataset = make_dataset(user_entries=[
            make_user("ñnow do it, éjust once, step ٣ and step 4", uuid="u1"),
        ])

        result = patterns.analyze_patterns(dataset)

        self.assertEqual(result.user_style["impatient"]["now"], 1)
        self.assertEqual(result.user_style["impatient"]["just"], 1)
        self.assertEqual(result.user_style["detailed"]["steps"], 1)

    def test_content_counters(self) -> None:
        dataset = make_dataset(user_entries=[
            make_user("see https://a.dev and http://b.dev 🎉\n```py\nx = 1\n```", uuid="u1"),
        ])

        result = patterns.analyze_patterns(dataset)

        self.assertEqual(result.url_count, 2)
        self.assertEqual(result.emoji_count, 1)
        self.assertEqual(result.code_block_count, 2)

    def test_longest_and_shortest_prompt(self) -> None:
        long_prompt = "x" * 700
        dataset = make_dataset(user_entries=[
            make_user("ok", uuid="u1"),
            make_user("fix the login bug", uuid="u2"),
            make_user(long_prompt, uuid="u3"),
            make_user("add dark mode please", uuid="u4"),
        ])

        result = patterns.analyze_patterns(dataset)

        self.assertEqual(result.longest_prompt.length, 700)
        self.assertEqual(len(result.longest_prompt.text), 500)
        # "ok" is too short to count as the shortest prompt
        self.assertEqual(result.shortest_prompt.text, "fix the login bug")
        self.assertEqual(result.shortest_prompt.length, 17)

    def test_shortest_prompt_placeholder_when_all_prompts_are_trivial(self) -> None:
        dataset = make_dataset(user_entries=[make_user("yes", uuid="u1"), make_user("go on", uuid="u2")])

        result = patterns.analyze_patterns(dataset)

        self.assertEqual(result.shortest_prompt.length, 0)
        self.assertEqual(result.longest_prompt.text, "go on")

    def test_claude_phrases_use_text_blocks_only(self) -> None:
        dataset = make_dataset(assistant_entries=[
            make_assistant([
                text("You're absolutely right! Let me fix that."),
                tool("Write", content="you're right, let me", file_path="/x.txt"),
                text("I apologize for the confusion. Let me try again."),
            ]),
        ])

        result = patterns.analyze_patterns(dataset)

        self.assertEqual(result.claude_phrases["youre_right"], 1)
        self.assertEqual(result.claude_phrases["let_me"], 2)
        self.assertEqual(result.claude_phrases["apologize"], 1)
        self.assertEqual(result.claude_phrases["certainly"], 0)

    def test_round_trip_through_dict(self) -> None:
        dataset = make_dataset(user_entries=[make_user("Please refactor this module now!!", uuid="u1")])
        result = patterns.analyze_patterns(dataset)

        self.assertEqual(PatternAnalysis.from_dict(result.to_dict()), result)


class SummaryHelperTests(unittest.TestCase):
    def setUp(self) -> None:
        self.analysis = patterns.analyze_patterns(make_dataset(user_entries=[
            make_user("please, thanks, I appreciate it. Nice and perfect!", uuid="u1"),
            make_user("why? how?", uuid="u2"),
        ]))

    def test_dominant_style(self) -> None:
        dominant = patterns.get_dominant_style(self.analysis)

        self.assertEqual(dominant["style"], "polite")
        self.assertEqual(dominant["score"], 5)
        self.assertEqual(dominant["description"], patterns.STYLE_DESCRIPTIONS["polite"])

    def test_communication_stats(self) -> None:
        stats = patterns.get_communication_stats(self.analysis)

        self.assertEqual(stats["polite_count"], 5)
        self.assertEqual(stats["curious_count"], 2)
        self.assertEqual(stats["question_ratio"], 2)

    def test_most_common_claude_phrase(self) -> None:
        self.assertEqual(patterns.get_most_common_claude_phrase(self.analysis), "None")

        busy = patterns.analyze_patterns(make_dataset(assistant_entries=[
            make_assistant([text("Certainly. Certainly! Let me check.")]),
        ]))
        self.assertEqual(patterns.get_most_common_claude_phrase(busy), '"Certainly"')

    def test_frustration_score_is_capped(self) -> None:
        analysis = PatternAnalysis(user_frustration={"again": 150, "all_caps": 10})

        self.assertEqual(patterns.get_frustration_score(analysis), 100)


if __name__ == "__main__":
    unittest.main()
