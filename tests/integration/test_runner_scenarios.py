"""
End-to-end runner scenarios.

A real PdfcoConnector talks to mock sessions that route on URL, so every
layer from payload assembly to inline materialization runs for real.
"""
import asyncio
import threading
from typing import Any, Dict, List

import pytest
import requests

from pdfco.core.errors import ActionValidationError, ApiError, JobFailedError, JobTimeoutError, TransportError
from pdfco.core.materializer import InlineMode
from pdfco.runner import ActionRunner

BASE = 'https://api.example.test'
PDF = 'https://example.com/doc.pdf'


class FakeApi:
    """Routes mock session calls to scripted responses by URL."""

    def __init__(self, make_response):
        self.reply = make_response
        self.submissions: Dict[str, Any] = {}
        self.statuses: Dict[str, List[Dict[str, Any]]] = {}
        self.downloads: Dict[str, str] = {}
        self.requests: List[tuple] = []
        self._lock = threading.Lock()

    def accept(self, job_id: str):
        """Submission response for an accepted background job."""
        return self.reply(200, {'jobId': job_id, 'error': False, 'status': 200, 'url': f'{BASE}/pending/{job_id}'})

    def post(self, url, json=None, timeout=None):
        with self._lock:
            self.requests.append((url, json))
            if url == f'{BASE}/v1/job/check':
                feed = self.statuses[json['jobid']]
                record = feed.pop(0) if len(feed) > 1 else feed[0]
                return self.reply(200, record)
        response = self.submissions[url[len(BASE):]]
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, timeout=None):
        return self.reply(200, text=self.downloads[url])

    def status_checks(self, job_id: str) -> int:
        return sum(1 for url, body in self.requests if body == {'jobid': job_id})


@pytest.fixture
def api(mock_session, mock_download_session, make_response) -> FakeApi:
    fake = FakeApi(make_response)
    mock_session.post.side_effect = fake.post
    mock_download_session.get.side_effect = fake.get
    return fake


@pytest.fixture
def runner(connector, client_config, fake_sleep) -> ActionRunner:
    return ActionRunner(connector, client_config, sleep=fake_sleep)


class TestAsyncJob:
    """Submission answered with a job id, then polled to completion."""

    def test_inline_text_materialized(self, runner, api, mock_download_session, fake_sleep):
        result_url = 'https://files.example/j1.txt'
        api.submissions['/v1/pdf/convert/to/text'] = api.accept('J1')
        api.statuses['J1'] = [
            {'status': 'working'},
            {'status': 'working'},
            {'status': 'success', 'url': result_url, 'credits': 4},
        ]
        api.downloads[result_url] = 'Hello World'

        envelope = asyncio.run(runner.run('convert_from_pdf', {'url': PDF}))

        assert envelope == {'status': 'success', 'url': result_url, 'credits': 4, 'body': 'Hello World'}
        assert api.status_checks('J1') == 3
        assert fake_sleep.waits == [0.5, 0.5, 0.5]
        mock_download_session.get.assert_called_once_with(result_url, timeout=5)

    def test_submission_payload(self, runner, api):
        api.submissions['/v1/pdf/convert/to/csv'] = api.accept('J2')
        api.statuses['J2'] = [{'status': 'success', 'url': 'https://files.example/j2.csv'}]
        api.downloads['https://files.example/j2.csv'] = 'a,b'

        asyncio.run(runner.run('convert_from_pdf', {
            'url': PDF,
            'convertType': 'toCsv',
            'profiles': "{'ExtractShapes': true, }",
        }))

        url, body = api.requests[0]
        assert url == f'{BASE}/v1/pdf/convert/to/csv'
        assert body == {
            'async': True,
            'inline': True,
            'url': PDF,
            'profiles': '{"ExtractShapes": true }',
        }

    def test_image_links_parsed(self, runner, api):
        links_url = 'https://files.example/j3.json'
        api.submissions['/v1/pdf/convert/to/png'] = api.accept('J3')
        api.statuses['J3'] = [{'status': 'success', 'url': links_url}]
        api.downloads[links_url] = '["https://files.example/p1.png", "https://files.example/p2.png"]'

        envelope = asyncio.run(runner.run('convert_from_pdf', {'url': PDF, 'convertType': 'toPng'}))

        assert envelope['body'] == ['https://files.example/p1.png', 'https://files.example/p2.png']

    def test_binary_output_not_fetched(self, runner, api, mock_download_session):
        api.submissions['/v1/pdf/edit/rotate/auto'] = api.accept('J4')
        api.statuses['J4'] = [{'status': 'working'}, {'status': 'success', 'url': 'https://files.example/j4.pdf'}]

        envelope = asyncio.run(runner.run('rotate_pdf', {'url': PDF}))

        assert envelope == {'status': 'success', 'url': 'https://files.example/j4.pdf'}
        mock_download_session.get.assert_not_called()

    def test_job_failed(self, runner, api, mock_download_session):
        api.submissions['/v1/pdf/security/remove'] = api.accept('J5')
        api.statuses['J5'] = [{'status': 'working'}, {'status': 'failed', 'message': 'Wrong password'}]

        with pytest.raises(JobFailedError) as exc_info:
            asyncio.run(runner.run('pdf_security', {'url': PDF, 'mode': 'remove_security', 'password': 'x'}))

        assert exc_info.value.job_id == 'J5'
        assert exc_info.value.message == 'Wrong password'
        mock_download_session.get.assert_not_called()

    def test_failed_record_with_error_flag(self, runner, api):
        api.submissions['/v1/pdf/edit/rotate/auto'] = api.accept('J7')
        api.statuses['J7'] = [{'status': 'failed', 'error': True, 'message': 'Bad PDF'}]

        with pytest.raises(JobFailedError) as exc_info:
            asyncio.run(runner.run('rotate_pdf', {'url': PDF}))

        assert exc_info.value.job_id == 'J7'
        assert exc_info.value.message == 'Bad PDF'

    def test_job_timeout(self, runner, api):
        api.submissions['/v1/pdf/makesearchable'] = api.accept('J6')
        api.statuses['J6'] = [{'status': 'working'}]

        with pytest.raises(JobTimeoutError) as exc_info:
            asyncio.run(runner.run('make_pdf_searchable', {'url': PDF}))

        # client_config allows five status checks
        assert exc_info.value.attempts == 5
        assert api.status_checks('J6') == 5


class TestImmediateResponse:
    """Submissions answered without a job id."""

    def test_returned_verbatim(self, runner, api, fake_sleep):
        response_body = {'url': 'https://files.example/out.pdf', 'pageCount': 3, 'error': False, 'status': 200}
        api.submissions['/v1/pdf/edit/delete-pages'] = api.reply(200, response_body)

        envelope = asyncio.run(runner.run('delete_pdf_pages', {'url': PDF, 'pages': '1'}))

        assert envelope == response_body
        assert len(api.requests) == 1
        assert fake_sleep.waits == []

    def test_api_error_not_polled(self, runner, api, fake_sleep):
        api.submissions['/v1/pdf/convert/to/text'] = api.reply(
            400, {'error': True, 'status': 400, 'message': 'Invalid URL'}
        )

        with pytest.raises(ApiError) as exc_info:
            asyncio.run(runner.run('convert_from_pdf', {'url': 'not-a-url'}))

        assert exc_info.value.code == 400
        assert exc_info.value.message == 'Invalid URL'
        assert len(api.requests) == 1
        assert fake_sleep.waits == []

    def test_transport_error(self, runner, api):
        api.submissions['/v2/pdf/compress'] = requests.ConnectionError('connection refused')

        with pytest.raises(TransportError):
            asyncio.run(runner.run('compress_pdf', {'url': PDF}))

    def test_run_action_direct(self, runner, api):
        api.submissions['/v1/custom'] = api.reply(200, {'body': 'plain', 'error': False})

        envelope = asyncio.run(runner.run_action('/v1/custom', {'url': PDF, 'profiles': '  '}, InlineMode.TEXT))

        assert envelope == {'body': 'plain', 'error': False}
        assert api.requests[0][1] == {'url': PDF}


class TestBatch:
    """Concurrent invocations."""

    def setup_jobs(self, api):
        api.submissions['/v1/pdf/convert/to/text'] = api.reply(
            200, {'url': 'https://files.example/direct.pdf', 'error': False}
        )
        api.submissions['/v1/pdf/edit/delete-pages'] = api.reply(
            400, {'error': True, 'status': 400, 'message': 'Invalid page range'}
        )
        api.submissions['/v1/pdf/edit/rotate/auto'] = api.accept('B1')
        api.statuses['B1'] = [{'status': 'working'}, {'status': 'success', 'url': 'https://files.example/b1.pdf'}]

    def test_continue_on_fail(self, runner, api):
        self.setup_jobs(api)
        items = [
            ('convert_from_pdf', {'url': PDF, 'inline': False}),
            ('delete_pdf_pages', {'url': PDF, 'pages': '99'}),
            ('rotate_pdf', {'url': PDF}),
            ('delete_pdf_pages', {'url': PDF}),
        ]

        results = asyncio.run(runner.run_batch(items, continue_on_fail=True))

        assert [r.action for r in results] == [name for name, _ in items]
        assert [r.success for r in results] == [True, False, True, False]
        assert results[0].envelope == {'url': 'https://files.example/direct.pdf', 'error': False}
        assert isinstance(results[1].exception, ApiError)
        assert results[1].error == '[400] Invalid page range'
        assert results[2].envelope['url'] == 'https://files.example/b1.pdf'
        assert isinstance(results[3].exception, ActionValidationError)

    def test_first_failure_raises(self, runner, api):
        self.setup_jobs(api)
        items = [
            ('rotate_pdf', {'url': PDF}),
            ('delete_pdf_pages', {'url': PDF, 'pages': '99'}),
        ]

        with pytest.raises(ApiError):
            asyncio.run(runner.run_batch(items))

    def test_malformed_wire_records_recorded(self, runner, api):
        """Unreadable submission or status records fail their own item only."""
        api.submissions['/v1/pdf/edit/rotate/auto'] = api.reply(200, {'jobId': 123, 'error': False})
        api.submissions['/v1/pdf/makesearchable'] = api.accept('M1')
        api.statuses['M1'] = [{'status': 'working', 'progress': 'halfway'}]
        api.submissions['/v1/pdf/convert/to/text'] = api.reply(
            200, {'url': 'https://files.example/direct.pdf', 'error': False}
        )

        results = asyncio.run(runner.run_batch(
            [
                ('rotate_pdf', {'url': PDF}),
                ('make_pdf_searchable', {'url': PDF}),
                ('convert_from_pdf', {'url': PDF, 'inline': False}),
            ],
            continue_on_fail=True,
        ))

        assert [r.success for r in results] == [False, False, True]
        assert isinstance(results[0].exception, TransportError)
        assert isinstance(results[1].exception, TransportError)

    def test_jobs_do_not_share_state(self, runner, api):
        for job_id, endpoint in (('K1', '/v1/pdf/edit/rotate/auto'), ('K2', '/v1/pdf/makesearchable')):
            api.submissions[endpoint] = api.accept(job_id)
        api.statuses['K1'] = [{'status': 'working'}, {'status': 'success', 'url': 'https://files.example/k1.pdf'}]
        api.statuses['K2'] = [{'status': 'success', 'url': 'https://files.example/k2.pdf'}]

        results = asyncio.run(runner.run_batch(
            [('rotate_pdf', {'url': PDF}), ('make_pdf_searchable', {'url': PDF})],
            concurrency=1,
        ))

        assert [r.envelope['url'] for r in results] == [
            'https://files.example/k1.pdf',
            'https://files.example/k2.pdf',
        ]
        assert api.status_checks('K1') == 2
        assert api.status_checks('K2') == 1
