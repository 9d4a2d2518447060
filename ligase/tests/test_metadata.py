# This file is part of Ligase.
#
# Licensed under MIT License.

"""Tests for ligase.metadata loaders."""

import sqlite3

import pytest

from ligase.core.errors import ConfigurationError, ResourceUnavailable
from ligase.metadata import SqliteMetadataLoader, TsvMetadataLoader, get_loader


def make_sqlite(path, contigs, samples):
    conn = sqlite3.connect(str(path))
    conn.execute('CREATE TABLE contigs (name TEXT, column_offset INTEGER, length INTEGER)')
    conn.execute('CREATE TABLE samples (sample_idx INTEGER, name TEXT)')
    conn.executemany('INSERT INTO contigs VALUES (?, ?, ?)', contigs)
    conn.executemany('INSERT INTO samples VALUES (?, ?)', samples)
    conn.commit()
    conn.close()
    return str(path)


class TestSqliteLoader:
    def test_load(self, tmp_path):
        db = make_sqlite(
            tmp_path / 'meta.sqlite',
            [('chr2', 100, 50), ('chr1', 0, 100)],
            [(1, 'NA12891'), (0, 'NA12878')],
        )
        meta = SqliteMetadataLoader(db).load()
        assert meta.contigs == (('chr2', 100, 50), ('chr1', 0, 100))
        assert meta.samples == ('NA12878', 'NA12891')

    def test_missing_file(self, tmp_path):
        with pytest.raises(ResourceUnavailable):
            SqliteMetadataLoader(str(tmp_path / 'nope.sqlite')).load()

    def test_missing_table(self, tmp_path):
        path = tmp_path / 'empty.sqlite'
        conn = sqlite3.connect(str(path))
        conn.execute('CREATE TABLE other (x INTEGER)')
        conn.commit()
        conn.close()
        with pytest.raises(ResourceUnavailable):
            SqliteMetadataLoader(str(path)).load()

    def test_sample_indices_must_be_dense(self, tmp_path):
        db = make_sqlite(tmp_path / 'meta.sqlite', [('chr1', 0, 10)], [(0, 'a'), (2, 'b')])
        with pytest.raises(ConfigurationError):
            SqliteMetadataLoader(db).load()

    def test_source(self):
        assert SqliteMetadataLoader('x.sqlite').source == 'sqlite:x.sqlite'


class TestTsvLoader:
    def test_load(self, tmp_path):
        contigs = tmp_path / 'contigs.tsv'
        contigs.write_text('# name\toffset\tlength\nchr1\t0\t100\n\nchr2\t100\t50\n')
        samples = tmp_path / 'samples.txt'
        samples.write_text('s0\n# comment\ns1\n')
        meta = TsvMetadataLoader(str(contigs), str(samples)).load()
        assert meta.contigs == (('chr1', 0, 100), ('chr2', 100, 50))
        assert meta.samples == ('s0', 's1')

    def test_no_sample_file(self, tmp_path):
        contigs = tmp_path / 'contigs.tsv'
        contigs.write_text('chr1\t0\t100\n')
        assert TsvMetadataLoader(str(contigs)).load().samples == ()

    def test_short_row(self, tmp_path):
        contigs = tmp_path / 'contigs.tsv'
        contigs.write_text('chr1\t0\n')
        with pytest.raises(ConfigurationError):
            TsvMetadataLoader(str(contigs)).load()

    def test_bad_number(self, tmp_path):
        contigs = tmp_path / 'contigs.tsv'
        contigs.write_text('chr1\tzero\t100\n')
        with pytest.raises(ConfigurationError):
            TsvMetadataLoader(str(contigs)).load()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ResourceUnavailable):
            TsvMetadataLoader(str(tmp_path / 'missing.tsv')).load()


class TestGetLoader:
    def test_sqlite(self):
        assert isinstance(get_loader({'sqlite': 'a.sqlite'}), SqliteMetadataLoader)

    def test_tsv(self):
        loader = get_loader({'contigs': 'c.tsv', 'samples': 's.txt'})
        assert isinstance(loader, TsvMetadataLoader)
        assert loader.sample_file == 's.txt'

    def test_unknown(self):
        with pytest.raises(ConfigurationError):
            get_loader({'postgres': 'db'})
