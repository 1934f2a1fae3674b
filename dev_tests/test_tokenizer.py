# dev_tests/test_tokenizer.py
# Tests for components.tokenizer: byte stream cursor, classification and
# maximal-munch scanning against a PrefixTrie.

import io
import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from components.tokenizer import (
    ByteStream,
    Category,
    Token,
    Tokenizer,
    hit_word_boundary,
    is_alphanumeric,
    is_space,
    is_symbol,
)
from tries.compressed_trie import PrefixTrie

KW = Category.KEYWORD
SYM = Category.SYMBOL
USER = Category.USER
END = Category.END


def make(keywords=(), symbols=()):
    pairs = [(k, KW) for k in keywords] + [(s, SYM) for s in symbols]
    return Tokenizer.from_registrations(pairs)


def scan(tokenizer, source):
    return [(t.category, t.text) for t in tokenizer.tokenize(source)]


class TestClassification(unittest.TestCase):
    def test_classes(self):
        self.assertTrue(is_alphanumeric("a"))
        self.assertTrue(is_alphanumeric("Z"))
        self.assertTrue(is_alphanumeric("7"))
        self.assertFalse(is_alphanumeric("_"))
        for c in " \t\n\v\f\r":
            self.assertTrue(is_space(c))
        self.assertTrue(is_symbol("+"))
        self.assertTrue(is_symbol("\xe9"))  # non-ASCII is symbol class
        self.assertFalse(is_symbol("q"))

    def test_word_boundary(self):
        self.assertFalse(hit_word_boundary(None, " "))
        self.assertFalse(hit_word_boundary(None, "+"))
        self.assertTrue(hit_word_boundary("a", " "))
        self.assertTrue(hit_word_boundary("a", "+"))
        self.assertTrue(hit_word_boundary("+", "a"))
        self.assertFalse(hit_word_boundary("a", "1"))
        self.assertFalse(hit_word_boundary("+", "="))


class TestByteStream(unittest.TestCase):
    def test_peek_get_unget(self):
        s = ByteStream("ab")
        self.assertEqual(s.peek(), "a")
        self.assertEqual(s.peek(), "a")
        self.assertEqual(s.get(), "a")
        s.unget("a")
        self.assertEqual(s.get(), "a")
        self.assertEqual(s.get(), "b")
        self.assertTrue(s.at_end())
        self.assertEqual(s.get(), "")
        self.assertEqual(s.peek(), "")

    def test_bytes_decode_one_char_per_byte(self):
        s = ByteStream(b"\xc3\xa9x")
        self.assertEqual([s.get(), s.get(), s.get()], ["\xc3", "\xa9", "x"])
        self.assertTrue(s.at_end())

    def test_binary_and_text_files(self):
        tok = make(keywords=["if"])
        for fp in (io.BytesIO(b"if x"), io.StringIO("if x")):
            self.assertEqual(
                scan(tok, ByteStream(fp)),
                [(KW, "if"), (USER, "x"), (END, "")],
            )

    def test_unsupported_source(self):
        with self.assertRaises(TypeError):
            ByteStream(42)


class TestRegistration(unittest.TestCase):
    def test_only_keyword_and_symbol(self):
        for bad in (Category.END, Category.USER):
            with self.assertRaises(ValueError):
                Tokenizer.from_registrations([("x", bad)])

    def test_empty_literal_rejected(self):
        with self.assertRaises(ValueError):
            Tokenizer.from_registrations([("", SYM)])

    def test_last_registration_wins(self):
        tok = Tokenizer.from_registrations([("::", KW), ("::", SYM)])
        self.assertEqual(scan(tok, "::"), [(SYM, "::"), (END, "")])


class TestScanning(unittest.TestCase):
    def test_maximal_munch(self):
        tok = make(symbols=["=", "=="])
        self.assertEqual(scan(tok, "=="), [(SYM, "=="), (END, "")])
        self.assertEqual(scan(tok, "==="), [(SYM, "=="), (SYM, "="), (END, "")])
        self.assertEqual(scan(tok, "= ="), [(SYM, "="), (SYM, "="), (END, "")])

    def test_three_char_operator(self):
        tok = make(symbols=["<", "<<", "<<=", "="])
        self.assertEqual(scan(tok, "<<="), [(SYM, "<<="), (END, "")])
        self.assertEqual(scan(tok, "<<<"), [(SYM, "<<"), (SYM, "<"), (END, "")])
        # "<=" is not registered and "<" has no "=" continuation
        self.assertEqual(scan(tok, "<="), [(SYM, "<"), (SYM, "="), (END, "")])

    def test_keyword_prefix_not_split(self):
        tok = make(keywords=["if"])
        self.assertEqual(scan(tok, "ifx"), [(USER, "ifx"), (END, "")])
        self.assertEqual(scan(tok, "if"), [(KW, "if"), (END, "")])

    def test_mixed_statement(self):
        tok = make(keywords=["if"], symbols=["(", ")"])
        self.assertEqual(
            scan(tok, "if(x)"),
            [(KW, "if"), (SYM, "("), (USER, "x"), (SYM, ")"), (END, "")],
        )

    def test_unknown_sequence(self):
        tok = make(keywords=["if"], symbols=["+"])
        self.assertEqual(scan(tok, "12345"), [(USER, "12345"), (END, "")])
        self.assertEqual(scan(tok, "  abc123  "), [(USER, "abc123"), (END, "")])
        self.assertEqual(scan(tok, "@@"), [(USER, "@@"), (END, "")])

    def test_single_symbol_cut_immediately(self):
        tok = make(symbols=["(", ")", "+"])
        self.assertEqual(
            scan(tok, "(()+"),
            [(SYM, "("), (SYM, "("), (SYM, ")"), (SYM, "+"), (END, "")],
        )

    def test_unregistered_symbol_run(self):
        tok = make(symbols=["("])
        self.assertEqual(scan(tok, "(@$"), [(SYM, "("), (USER, "@$"), (END, "")])

    def test_no_backtracking_on_dead_end(self):
        # "-=" is not registered, so reaching it mid-way to "-=>" leaves a USER token
        tok = make(symbols=["-", "-=>"])
        self.assertEqual(scan(tok, "-=>"), [(SYM, "-=>"), (END, "")])
        self.assertEqual(scan(tok, "-=a"), [(USER, "-="), (USER, "a"), (END, "")])

    def test_whitespace_kinds(self):
        tok = make(keywords=["int"], symbols=[";"])
        self.assertEqual(
            scan(tok, "\tint\r\n x ;\v\f"),
            [(KW, "int"), (USER, "x"), (SYM, ";"), (END, "")],
        )

    def test_empty_and_blank_input(self):
        tok = make(symbols=["+"])
        self.assertEqual(scan(tok, ""), [(END, "")])
        self.assertEqual(scan(tok, " \n\t "), [(END, "")])

    def test_exhaustion_is_idempotent(self):
        tok = make(keywords=["if"])
        stream = ByteStream("if")
        self.assertEqual(tok.next_token(stream), Token(KW, "if"))
        for _ in range(5):
            self.assertEqual(tok.next_token(stream), Token(END, ""))

    def test_pushback_resumes_at_boundary(self):
        tok = make(symbols=["+"])
        stream = ByteStream("a+b")
        self.assertEqual(tok.next_token(stream), Token(USER, "a"))
        self.assertEqual(stream.peek(), "+")
        self.assertEqual(tok.next_token(stream), Token(SYM, "+"))
        self.assertEqual(stream.peek(), "b")

    def test_tokens_cover_non_whitespace(self):
        tok = make(keywords=["while", "return"], symbols=["{", "}", "(", ")", "<", "<=", "++", "+", ";"])
        src = "while(i<=10){i++;}\nreturn i+1;"
        texts = [t.text for t in tok.tokenize(src)]
        self.assertEqual("".join(texts), "".join(src.split()))
        self.assertEqual(
            texts,
            ["while", "(", "i", "<=", "10", ")", "{", "i", "++", ";", "}",
             "return", "i", "+", "1", ";", ""],
        )

    def test_shared_trie_independent_streams(self):
        tok = make(keywords=["if"], symbols=["=="])
        a, b = ByteStream("if a == b"), ByteStream("x == if")
        got_a, got_b = [], []
        for _ in range(5):
            got_a.append(tok.next_token(a).text)
            got_b.append(tok.next_token(b).text)
        self.assertEqual(got_a, ["if", "a", "==", "b", ""])
        self.assertEqual(got_b, ["x", "==", "if", "", ""])

    def test_keyword_literal_does_not_cut_symbol_run(self):
        # only SYMBOL literals end a run early; a symbol-class KEYWORD does not
        tok = Tokenizer.from_registrations([("<", KW), ("(", SYM)])
        self.assertEqual(scan(tok, "<("), [(USER, "<("), (END, "")])

    def test_branch_node_does_not_cut(self):
        # "-" is only a shared prefix of "-=" and "->", not a registered literal
        tok = make(symbols=["-=", "->"])
        self.assertEqual(
            scan(tok, "-- -> -="),
            [(USER, "--"), (SYM, "->"), (SYM, "-="), (END, "")],
        )

    def test_foreign_trie_values_are_user(self):
        trie = PrefixTrie()
        trie.insert("x", ["KW"])
        trie.insert("y", [[1]])
        trie.insert("z", [Category.KEYWORD])
        self.assertEqual(
            scan(Tokenizer(trie), "x y z"),
            [(USER, "x"), (USER, "y"), (KW, "z"), (END, "")],
        )


class TestPositionZeroSymbols(unittest.TestCase):
    """One-byte symbol at token start with longer registered continuations."""

    def setUp(self):
        self.tok = make(symbols=["-", "-=", "->"])

    def test_arrow(self):
        self.assertEqual(scan(self.tok, "->"), [(SYM, "->"), (END, "")])

    def test_minus_assign(self):
        self.assertEqual(scan(self.tok, "-="), [(SYM, "-="), (END, "")])

    def test_minus_alone(self):
        self.assertEqual(scan(self.tok, "-"), [(SYM, "-"), (END, "")])

    def test_double_minus(self):
        self.assertEqual(scan(self.tok, "--"), [(SYM, "-"), (SYM, "-"), (END, "")])

    def test_minus_then_word(self):
        self.assertEqual(scan(self.tok, "-x"), [(SYM, "-"), (USER, "x"), (END, "")])

    def test_arrow_chain(self):
        self.assertEqual(
            scan(self.tok, "p->q-=1"),
            [(USER, "p"), (SYM, "->"), (USER, "q"), (SYM, "-="), (USER, "1"), (END, "")],
        )


if __name__ == "__main__":
    unittest.main(verbosity=2)
