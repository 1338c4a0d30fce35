from rentalhub.utils.text import start_case, to_sentence_case


def test_start_case_collapses_case_and_separators():
    assert start_case("  sunset   VILLAS-block2 ") == "Sunset Villas Block 2"
    assert start_case("GREEN_acres") == "Green Acres"


def test_start_case_makes_equivalent_names_collide():
    assert start_case("sunset villas") == start_case("SUNSET-VILLAS")


def test_start_case_empty():
    assert start_case("") == ""
    assert start_case(None) == ""
    assert start_case("--") == ""


def test_sentence_case_capitalizes_each_sentence():
    text = "A GREAT place. NEAR the lake!  quiet? yes"
    assert to_sentence_case(text) == "A great place. Near the lake! Quiet? Yes"


def test_sentence_case_keeps_single_sentence():
    assert to_sentence_case("cosy STUDIO flat") == "Cosy studio flat"
    assert to_sentence_case("   ") == ""
