from __future__ import annotations

import pytest

from kaolin.document import Document
from kaolin.loc import Size


@pytest.fixture
def make_doc(tmpdir):
    def make_doc(
            s,
            *,
            size=Size(80, 24),
            tab_width=4,
            read_only=False,
            load=True,
    ):
        f = tmpdir.join('f')
        f.write_binary(s.encode())
        doc = Document.open(
            size, str(f), tab_width=tab_width, read_only=read_only,
        )
        if load:
            doc.load_to(doc.len_lines())
        return doc
    return make_doc
