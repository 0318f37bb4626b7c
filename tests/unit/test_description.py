from cloudru_mcp.CONFIG.settings import Config
from cloudru_mcp.SERVER.description import render_description


def test_description_lists_tools_and_masks_credentials():
    config = Config(key_id="keyid-12345", key_secret="secret-67890", registry_name="myreg", current_dir="svc")

    text = render_description(config, 200)

    assert "cloudru_get_registry_images" in text
    assert "at most 200 records" in text
    assert "CLOUDRU_REGISTRY_NAME: (myreg)" in text
    assert "Current directory: svc" in text
    assert "secret-67890" not in text
    assert "sec***890" in text
    assert "key***345" in text
