import pytest
from unittest.mock import Mock
from fastapi.testclient import TestClient
from notegraph.src.api.main import app
from notegraph.src.api.dependencies import get_vault_service
from notegraph.src.models.graph import GraphData, GraphLink, GraphNode

client = TestClient(app)

@pytest.fixture
def mock_vault():
    mock_instance = Mock()
    app.dependency_overrides[get_vault_service] = lambda: mock_instance
    yield mock_instance
    app.dependency_overrides = {}

def test_get_graph_data_success(mock_vault):
    """Test successful retrieval of graph data."""
    mock_vault.snapshot.return_value.graph = GraphData(
        nodes=[
            GraphNode(id="note1", title="Note 1", slug="note1", folder=""),
            GraphNode(id="note2", title="Note 2", slug="slipbox/note2", folder="slipbox"),
        ],
        links=[GraphLink(source="note1", target="note2")],
    )

    response = client.get("/api/graph")

    assert response.status_code == 200
    data = response.json()
    assert "nodes" in data
    assert "links" in data
    assert len(data["nodes"]) == 2
    assert len(data["links"]) == 1
    assert data["nodes"][1] == {"id": "note2", "title": "Note 2", "slug": "slipbox/note2", "folder": "slipbox"}

def test_get_graph_data_error(mock_vault):
    """Test error handling when service fails."""
    mock_vault.snapshot.side_effect = Exception("Disk error")

    response = client.get("/api/graph")

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "internal_error"
    assert "Failed to build graph data" in body["message"]
