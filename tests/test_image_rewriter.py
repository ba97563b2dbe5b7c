import logging
from unittest.mock import MagicMock

import pytest

import constants
from image_rewriter import rewrite_images
from errors import MalformedImageError

ARCHIVE = "https://web.archive.org/web/20170923015827im_/"


def test_smiley_is_replaced_without_download(ctime, resolve_picture):
    content = f'Привет <img src="{ARCHIVE}http://glazelki.ru/wp-includes/images/smilies/simple-smile.png" alt=":)" class="wp-smiley" />!'
    assert rewrite_images(content, ctime, resolve_picture) == "Привет 🙂!"
    resolve_picture.assert_not_called()


def test_picture_is_resolved_with_date_bucket_and_number(ctime, resolve_picture):
    content = (
        f'<img src="{ARCHIVE}https://img-fotki.yandex.ru/get/1/a_XL.jpg" alt="Закат...">'
        f' и <img src="{ARCHIVE}https://img-fotki.yandex.ru/get/2/b_XL.jpg" title="Рассвет">'
    )
    result = rewrite_images(content, ctime, resolve_picture)

    assert result == "2017.09.23.01.58.1.jpg\nЗакат\n и 2017.09.23.01.58.2.jpg\nРассвет\n"
    resolve_picture.assert_any_call("https://img-fotki.yandex.ru/get/1/a_XL.jpg", "2017.09.23.01.58", 1)
    resolve_picture.assert_any_call("https://img-fotki.yandex.ru/get/2/b_XL.jpg", "2017.09.23.01.58", 2)


def test_empty_alt_wins_over_title(ctime, resolve_picture):
    content = '<img src="http://example.com/a.jpg" alt="" title="Подпись">'
    assert rewrite_images(content, ctime, resolve_picture) == "2017.09.23.01.58.1.jpg\n\n"


def test_smiley_counts_towards_numbering(ctime, resolve_picture):
    content = (
        '<img src="http://glazelki.ru/simple-smile.png">'
        '<img src="http://example.com/photo.jpg" alt="Фото">'
    )
    result = rewrite_images(content, ctime, resolve_picture)
    assert result == "🙂2017.09.23.01.58.2.jpg\nФото\n"
    resolve_picture.assert_called_once_with("http://example.com/photo.jpg", "2017.09.23.01.58", 2)


def test_repeated_tag_is_resolved_once(ctime, resolve_picture):
    tag = '<img src="http://example.com/photo.jpg" alt="Фото">'
    result = rewrite_images(f"{tag}\n{tag}", ctime, resolve_picture)
    assert result == "2017.09.23.01.58.1.jpg\nФото\n\n2017.09.23.01.58.1.jpg\nФото\n"
    resolve_picture.assert_called_once()


def test_surrounding_text_is_byte_identical(ctime, resolve_picture):
    content = '  <p class="x">До</p>\n<img SRC="http://example.com/p.jpg" ALT="A">\t<b>После</b>  '
    result = rewrite_images(content, ctime, resolve_picture)
    assert result == '  <p class="x">До</p>\n2017.09.23.01.58.1.jpg\nA\n\t<b>После</b>  '


def test_broken_picture_gets_placeholder(ctime, caplog):
    resolver = MagicMock(return_value=None)
    content = '<img src="http://example.com/broken.jpg" alt="Нет">'
    with caplog.at_level(logging.WARNING):
        result = rewrite_images(content, ctime, resolver)
    assert result == f"{constants.MISSING_PICTURE_NAME}\nНет\n"
    assert "is unavailable" in caplog.text


def test_image_without_src_fails(ctime, resolve_picture):
    with pytest.raises(MalformedImageError):
        rewrite_images('<img alt="no source">', ctime, resolve_picture)


def test_content_without_images_is_unchanged(ctime, resolve_picture):
    content = "Просто текст\n\nбез картинок"
    assert rewrite_images(content, ctime, resolve_picture) == content
    resolve_picture.assert_not_called()
