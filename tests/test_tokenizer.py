from unittest.mock import MagicMock, patch

from gitmerge.core.tokenizer import TokenCounter, estimate_tokens


class TestEstimateTokens:
    def test_empty(self):
        assert estimate_tokens("") == 0

    def test_exact_multiple(self):
        assert estimate_tokens("abcd") == 1

    def test_rounds_up(self):
        assert estimate_tokens("abcde") == 2

    def test_large(self):
        assert estimate_tokens("x" * 4001) == 1001


class TestTokenCounter:
    def test_encoder_loaded_lazily(self):
        with patch('gitmerge.core.tokenizer.tiktoken') as mock_tiktoken:
            counter = TokenCounter()
            mock_tiktoken.get_encoding.assert_not_called()
            assert counter.encoding_name == "cl100k_base"

    def test_count_with_encoder(self):
        with patch('gitmerge.core.tokenizer.tiktoken') as mock_tiktoken:
            mock_encoder = MagicMock()
            mock_encoder.encode.return_value = [1, 2, 3, 4, 5]
            mock_tiktoken.get_encoding.return_value = mock_encoder
            
            counter = TokenCounter("gpt2")
            assert counter.count("test text") == 5
            mock_tiktoken.get_encoding.assert_called_once_with("gpt2")
            mock_encoder.encode.assert_called_once_with("test text", disallowed_special=())

    def test_count_empty_string_skips_encoder(self):
        with patch('gitmerge.core.tokenizer.tiktoken') as mock_tiktoken:
            assert TokenCounter().count("") == 0
            mock_tiktoken.get_encoding.assert_not_called()
