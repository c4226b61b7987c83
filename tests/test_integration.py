import pytest
import numpy as np
from PIL import Image
import tempfile
import os

from trimosaic.cli import main
from trimosaic.renderer import load_vector


def write_image(directory, name='target.png', size=(24, 16)):
    array = np.zeros((size[1], size[0], 3), dtype=np.uint8)
    array[:, : size[0] // 2] = (230, 120, 20)
    array[:, size[0] // 2:] = (20, 90, 180)
    path = os.path.join(directory, name)
    Image.fromarray(array).save(path)
    return path


class TestIntegration:
    """End-to-end tests through the command line entry point."""

    def base_args(self, tmpdir):
        return [
            '--config', os.path.join(tmpdir, 'no_config.yaml'),
            '--triangles_n', '5',
            '--candidates', '30',
            '--workers', '1',
            '--seed', '0',
            '--quiet',
            f'paths.output_dir={tmpdir}',
        ]

    def test_full_run(self):
        """Test approximation with every output enabled."""
        with tempfile.TemporaryDirectory() as tmpdir:
            image_path = write_image(tmpdir)

            main([image_path, '--output', 'out.png', '--svg', 'out.svg', '--json', 'out.json',
                  '--compare', 'compare.png', '--proxy_size', '8'] + self.base_args(tmpdir))

            for name in ['out.png', 'out.svg', 'out.json', 'compare.png']:
                assert os.path.exists(os.path.join(tmpdir, name))

            with Image.open(os.path.join(tmpdir, 'out.png')) as rendered:
                assert rendered.size == (24, 16)

            vector = load_vector(os.path.join(tmpdir, 'out.json'))
            assert len(vector.triangles) == 5
            assert (vector.width, vector.height) == (24, 16)

            with open(os.path.join(tmpdir, 'out.svg')) as f:
                assert f.read().count('<polygon') == 5

    def test_replay(self):
        """Test re-rendering a saved triangle list at a larger scale."""
        with tempfile.TemporaryDirectory() as tmpdir:
            image_path = write_image(tmpdir)
            main([image_path, '--output', 'out.png', '--json', 'out.json',
                  '--proxy_size', '0'] + self.base_args(tmpdir))

            json_path = os.path.join(tmpdir, 'out.json')
            main([json_path, '--output', 'big.png', '--scale', '2'] + self.base_args(tmpdir))

            with Image.open(os.path.join(tmpdir, 'big.png')) as big:
                assert big.size == (48, 32)

    def test_missing_input(self, capsys):
        """Test that running without an input path exits non-zero."""
        with pytest.raises(SystemExit) as excinfo:
            main(['--quiet'])
        assert excinfo.value.code == 1
        assert 'Usage' in capsys.readouterr().err

    def test_undecodable_input(self):
        """Test that a broken image exits non-zero and writes nothing."""
        with tempfile.TemporaryDirectory() as tmpdir:
            bad_path = os.path.join(tmpdir, 'broken.png')
            with open(bad_path, 'w') as f:
                f.write('not an image')

            with pytest.raises(SystemExit) as excinfo:
                main([bad_path, '--output', 'out.png'] + self.base_args(tmpdir))

            assert excinfo.value.code == 1
            assert not os.path.exists(os.path.join(tmpdir, 'out.png'))

    def test_invalid_config(self):
        """Test that invalid configuration values exit non-zero."""
        with tempfile.TemporaryDirectory() as tmpdir:
            image_path = write_image(tmpdir)
            with pytest.raises(SystemExit) as excinfo:
                main([image_path, '--opacity', '400'] + self.base_args(tmpdir))
            assert excinfo.value.code == 2
