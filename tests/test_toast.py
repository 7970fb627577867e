from ui.common.toast import Toast, show_toast


def test_toast_text_and_level(qapp):
    toast = show_toast("Сохранено", "success", timeout_ms=10)

    assert isinstance(toast, Toast)
    assert toast.level == "success"
    assert toast.text() == "✅ Сохранено"
    toast.close()


def test_unknown_level_falls_back_to_info(qapp):
    toast = Toast("Привет", "whatever", timeout_ms=10)

    assert toast.text().startswith("ℹ️")
    toast.close()
